"""
Helmsman faults (errors and warnings) and their rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue.
- CommandException / CommandWarning: base types carrying a message plus options,
  able to render themselves as plain rich Text.
- Concrete faults for the dispatch paths: unknown command, help-only topic,
  option parsing failure, explicit help request, duplicated registration.

Integration
- The option set raises HelpRequested/OptionError out of parse().
- The registry catches them, prints them to its console and reports a usage
  status; it never reinterprets the parser's message.
- Registry.register() emits DuplicateCommandWarning through warnings.warn().
"""
from abc import ABC
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (111xx): UNKNOWN_COMMAND, MISSING_ACTION
    - option parsing (1111x): OPTION_FAILURE
    - help (112xx): HELP_REQUESTED
    - warnings (12xxx): DUPLICATED_COMMAND
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND    = 11101
    MISSING_ACTION     = 11102

    # --- option errors (11xxx) ---
    OPTION_FAILURE     = 11111

    # --- help (11xxx) ---
    HELP_REQUESTED     = 11201

    # --- warnings (12xxx) ---
    DUPLICATED_COMMAND = 12101


class CommandException(Exception):
    """
    base class for dispatch faults.

    attributes
    - message: the human readable text (Unset when the fault renders itself).
    - options: read-only mapping of extra context (name, suggestions, ...).
    - code: the FaultCode of the concrete class.
    """
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return Text(coalesce(self.message, ""))

    def __str__(self):
        return self.__rich__().plain


class UnknownCommandError(CommandException):
    """
    raised for a command name that is not registered.

    renders as
        unknown command: <name>

        Did you mean one of these?
            <candidate>
    the suggestion block is left out when there are no candidates.
    """
    code = FaultCode.UNKNOWN_COMMAND

    def __init__(self, name, suggestions=(), /):
        super().__init__(name=name, suggestions=tuple(suggestions))

    @property
    def name(self):
        return self.options["name"]

    @property
    def suggestions(self):
        return self.options["suggestions"]

    def __rich__(self):
        text = Text(f"unknown command: {self.name}\n")
        if self.suggestions:
            text.append("\nDid you mean one of these?\n")
            for suggestion in self.suggestions:
                text.append(f"    {suggestion}\n")
        text.rstrip()
        return text


class MissingActionError(UnknownCommandError):
    """
    raised when a help-only topic reaches the invoke step; reported exactly
    like an unknown command, suggestions included.
    """
    code = FaultCode.MISSING_ACTION


class OptionError(CommandException):
    """
    raised when the option parser rejects the arguments; the message is the
    parser's own text.
    """
    code = FaultCode.OPTION_FAILURE


class HelpRequested(CommandException):
    """
    raised when -h/--help is given and not defined by the option set; the
    usage callback has already run when this propagates.
    """
    code = FaultCode.HELP_REQUESTED

    def __init__(self, message="help requested", /, **options):
        super().__init__(message, **options)


class CommandWarning(ABC, Warning):
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return Text(f"warning: {coalesce(self.message, '')}")

    def __str__(self):
        return coalesce(self.message, "")


class DuplicateCommandWarning(CommandWarning):
    """
    emitted when a name is registered twice; the newer command wins.
    """
    code = FaultCode.DUPLICATED_COMMAND

    def __init__(self, name, /):
        super().__init__(f"command {name!r} already exists", name=name)


__all__ = (
    "FaultCode",
    "CommandException",
    "UnknownCommandError",
    "MissingActionError",
    "OptionError",
    "HelpRequested",
    "CommandWarning",
    "DuplicateCommandWarning",
)
