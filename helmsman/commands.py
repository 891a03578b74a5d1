"""
Helmsman command layer: one named unit of functionality.

What this module provides
- Command: bundles
  • an optional action, callable as action(args) with the positional arguments
    left after option parsing; absent for help-only topics;
  • a usage synopsis, a one-line short help and a multi-line long help;
  • its own OptionSet, exclusively owned by the command.
- Option definition shortcuts (bool, int, string, duration, ..., and their
  *_var forms) forwarded to the owned option set.

A command does not know its name: the name is the key it is registered under
in a Registry.

Quick start
    from helmsman import Command, Registry

    def export(args):
        print("exporting", args, "verbose" if verbose.value else "")

    command = Command(export, usage="export [-v] [-o <outfile>] <file>...", short="export some data")
    verbose = command.bool("v", False, "cause export to be verbose")
    output = command.string("o", "", "output to a file")

    registry = Registry("tool")
    registry.register("export", command)
"""
import inspect

from .options import OptionSet
from .utils import Unset, coalesce, mirror, rename


class Command:
    """
    A registrable command or help topic.

    Attributes (read-only)
    - action:   the callable run on dispatch, or None for a help-only topic.
    - usage:    one-line synopsis printed after the program name.
    - short:    one-line description for the command listing.
    - long:     free-form help appended to the detail view ("" when absent).
    - options:  the command's OptionSet.
    - runnable: True when an action is present.

    Construction
    - Command(action=Unset, /, usage=Unset, short=Unset, long=Unset)
      • action: callable or None/Unset (topic).
      • usage: defaults to "" ; short: defaults to the first line of the
        action's docstring, or ""; long: defaults to "".

    Raises
    - TypeError when action is not callable or a text field is not a string.
    """
    __introspectable__ = (
        "action",
        "usage",
        "short",
        "long",
        "options",
    )

    action = mirror("action")
    usage = mirror("usage")
    short = mirror("short")
    long = mirror("long")
    options = mirror("options")

    def __init__(self, action=Unset, /, usage=Unset, short=Unset, long=Unset):
        action = coalesce(action)
        if action is not None and not callable(action):
            raise TypeError("command 'action' must be callable")

        for name, value in (("usage", usage), ("short", short), ("long", long)):
            if not isinstance(value, str | Unset):
                raise TypeError(f"command {name!r} must be a string")

        if short is Unset and action is not None:
            short = (inspect.getdoc(action) or "").partition("\n")[0]

        self._action = action
        self._usage = coalesce(usage, "")
        self._short = coalesce(short, "")
        self._long = coalesce(long, "")
        self._options = OptionSet()

    @property
    def runnable(self):
        return self._action is not None

    def __call__(self, args=(), /):
        """
        Run the action with already parsed positional arguments.

        Raises
        - TypeError when the command is a help-only topic.
        """
        if not self.runnable:
            raise TypeError("command is a help topic and cannot be invoked")
        return self._action(list(args))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "command(%s)" % ", ".join(f"{name}={object!r}" for name, object in self.__rich_repr__())


def _forward(name, /):
    @rename(name)
    def forwarder(self, /, *args, **kwargs):
        return getattr(self._options, name)(*args, **kwargs)

    forwarder.__doc__ = getattr(OptionSet, name).__doc__
    forwarder.__signature__ = inspect.signature(getattr(OptionSet, name))
    return forwarder


for _name in (
    "var",
    "bool", "bool_var",
    "int", "int_var",
    "int64", "int64_var",
    "uint", "uint_var",
    "uint64", "uint64_var",
    "float", "float_var",
    "string", "string_var",
    "duration", "duration_var",
):
    setattr(Command, _name, _forward(_name))
del _name


__all__ = (
    "Command",
)
