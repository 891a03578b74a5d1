"""
Commands module behavioral tests (construction, topics, forwarding).

Scope
- Validate Command construction: defaults, docstring-derived short help, type checks.
- Validate help-only topics (no action).
- Validate option definitions forwarded to the owned OptionSet.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from helmsman import Command, OptionSet, BoolValue, StringValue


def export(args):
    """Export some data.

    Longer description that never reaches the listing.
    """
    return args


class TestCommandConstruction(TestCase):
    """Behavioral tests for Command construction."""

    def testDefaults(self):
        command = Command(lambda args: None)
        self.assertEqual(command.usage, "")
        self.assertEqual(command.short, "")
        self.assertEqual(command.long, "")
        self.assertIsInstance(command.options, OptionSet)
        self.assertTrue(command.runnable)

    def testShortFromDocstring(self):
        command = Command(export, usage="export <file>")
        self.assertEqual(command.short, "Export some data.")

    def testExplicitShortWins(self):
        command = Command(export, short="export things")
        self.assertEqual(command.short, "export things")

    def testExplicitEmptyShortKept(self):
        command = Command(export, short="")
        self.assertEqual(command.short, "")

    def testNonCallableActionRaises(self):
        with self.assertRaises(TypeError):
            Command("export")

    def testNonStringFieldsRaise(self):
        for field in ("usage", "short", "long"):
            with self.subTest(field=field):
                with self.assertRaises(TypeError):
                    Command(export, **{field: 1})

    def testOptionSetIsOwned(self):
        first, second = Command(export), Command(export)
        self.assertIsNot(first.options, second.options)
        self.assertIs(first.options, first.options)

    def testRepr(self):
        command = Command(export, usage="export <file>")
        self.assertTrue(repr(command).startswith("command(action="))
        self.assertIn("usage='export <file>'", repr(command))


class TestCommandInvocation(TestCase):
    """Behavioral tests for running a command's action."""

    def testActionReceivesList(self):
        command = Command(export)
        self.assertEqual(command(("a", "b")), ["a", "b"])
        self.assertEqual(command(), [])

    def testTopicIsNotRunnable(self):
        topic = Command(usage="topics", short="about topics", long="Topics are help-only.")
        self.assertFalse(topic.runnable)
        self.assertIsNone(topic.action)
        with self.assertRaises(TypeError):
            topic()

    def testNoneActionIsTopic(self):
        self.assertFalse(Command(None, short="about").runnable)


class TestOptionForwarding(TestCase):
    """Behavioral tests for the option definition shortcuts on Command."""

    def testTypedDefinitions(self):
        command = Command(export)
        verbose = command.bool("v", False, "cause export to be verbose")
        output = command.string("o", "", "output to a file")
        self.assertIsInstance(verbose, BoolValue)
        self.assertIsInstance(output, StringValue)
        self.assertEqual([option.name for option in command.options], ["o", "v"])

    def testVarDefinitions(self):
        settings = SimpleNamespace()
        command = Command(export)
        command.int_var(settings, "count", 2, "how many")
        command.options.parse(["--count=5"])
        self.assertEqual(settings.count, 5)

    def testForwardersKeepNamesAndDocs(self):
        self.assertEqual(Command.bool.__name__, "bool")
        self.assertEqual(Command.string_var.__name__, "string_var")
        self.assertEqual(Command.duration.__doc__, OptionSet.duration.__doc__)


if __name__ == "__main__":
    unittest.main()
