"""
Helmsman registry and dispatcher.

What this module provides
- Registry: the name -> Command mapping of one program, with lookup, typo
  suggestions, usage rendering and dispatch.
- Status / Dispatch: the outcome of a dispatch, so the whole routing and
  rendering core can be exercised without leaving the process.
- default: the process-wide Registry, plus module functions delegating to it.

Dispatch contract
- A registered name: its options are parsed and its action called with the
  remaining positional arguments. The action's return value is handed back
  unmodified: None or 0 means success, anything else failure.
- Help requested, option parse failures, unknown names, the "help" pseudo
  command, the empty name and help-only topics all end in Status.USAGE after
  writing to the registry's console (standard error).
- run() and main() turn Status.USAGE into sys.exit(2); dispatch() never exits.

Concurrency
- Registration is expected to happen once, single-threaded, before dispatch.
  Nothing here locks: callers registering from several threads must serialize.
"""
import shlex
import sys
import warnings
from collections.abc import Iterable
from enum import IntEnum
from typing import NamedTuple

from rich.console import Console

from .commands import Command
from .faults import *
from .options import OptionSet
from .usage import render_command, render_listing
from .utils import Unset, coalesce, mirror

console = Console(stderr=True)


class Status(IntEnum):
    """Outcome of a dispatch; the value doubles as the conventional exit status."""
    SUCCESS = 0
    FAILURE = 1
    USAGE = 2


class Dispatch(NamedTuple):
    """
    Result of Registry.dispatch().

    - status: a Status.
    - value:  the action's return value for SUCCESS/FAILURE, the fault (or None
              for plain listings) for USAGE.
    """
    status: Status
    value: object = None


class Registry:
    """
    Named collection of commands for one program.

    Construction
    - Registry(name="", descr="", *, console=Unset)
      • name: program name used in rendered text; when empty, the base name of
        sys.argv[0] is used at render time.
      • descr: program description, printed under the usage line of the listing.
      • console: rich Console receiving all usage/help/error output; defaults
        to a shared console bound to standard error.

    Global options
    - options is an OptionSet parsed by main() before the command name; its
      help/failure usage is the command listing.
    """
    __introspectable__ = ("name", "descr", "options")

    name = mirror("name")
    descr = mirror("descr")
    options = mirror("options")

    def __init__(self, name=Unset, descr=Unset, *, console=Unset):
        if not isinstance(name, str | Unset):
            raise TypeError("registry 'name' must be a string")
        if not isinstance(descr, str | Unset):
            raise TypeError("registry 'descr' must be a string")
        self._name = coalesce(name, "")
        self._descr = coalesce(descr, "")
        self._console = console
        self._commands = {}
        self._options = OptionSet(self._name, usage=self._print_listing)

    @property
    def console(self):
        return coalesce(self._console, console)

    def __contains__(self, name):
        return name in self._commands

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        return iter(self.names())

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "commands", self.names()

    def __repr__(self):
        return f"registry(name={self.name!r}, descr={self.descr!r}, commands={self.names()!r})"

    # ── registration and lookup ──────────────────────────────────────────────

    def register(self, name, command, /):
        """
        Register `command` under `name`.

        Behavior
        - An existing name is overwritten; DuplicateCommandWarning is emitted.
        - When the command's option set has no usage callback, one is installed
          that renders this command's detail view through this registry.

        Raises
        - TypeError: command is not a Command (a programming error), or name
          is not a string.
        - ValueError: name is empty (reserved for the top-level listing).
        """
        if not isinstance(command, Command):
            raise TypeError(f"registry cannot register {command!r}, command must be a Command")
        if not isinstance(name, str):
            raise TypeError("registry command name must be a string")
        if not name:
            raise ValueError("registry command name cannot be empty")

        if name in self._commands:
            warnings.warn(DuplicateCommandWarning(name), stacklevel=2)
        if command.options.usage is Unset:
            command.options.usage = lambda: self.print_usage(name)
        self._commands[name] = command

    def lookup(self, name, /):
        """Return the command registered as `name`, or None."""
        return self._commands.get(name)

    def names(self):
        """Return every registered name in ascending order."""
        return sorted(self._commands)

    def suggestions(self, prefix, /):
        """Return the registered names starting with `prefix`, sorted; "" matches all."""
        return sorted(name for name in self._commands if name.startswith(prefix))

    # ── rendering ────────────────────────────────────────────────────────────

    def _print(self, renderable):
        self.console.print(renderable, soft_wrap=True, highlight=False, end="")

    def _print_listing(self):
        self._print(render_listing(self))

    def print_usage(self, name="", /):
        """
        Print the detail view of `name`, or the command listing when `name`
        is empty or not registered.
        """
        if (command := self.lookup(name)) is not None:
            self._print(render_command(self, command))
        else:
            self._print_listing()

    def help(self, name, /):
        """
        Print the detail view of `name`, or the unknown-command report with
        suggestions when `name` is not registered. Returns the fault, if any.
        """
        if (command := self.lookup(name)) is not None:
            self._print(render_command(self, command))
            return None
        fault = UnknownCommandError(name, self.suggestions(name))
        self.console.print(fault, soft_wrap=True, highlight=False)
        return fault

    # ── dispatch ─────────────────────────────────────────────────────────────

    def dispatch(self, name, args=(), /):
        """
        Route `name` and `args`; never exits the process.

        Returns
        - Dispatch(Status.SUCCESS | Status.FAILURE, action result) when the
          command ran.
        - Dispatch(Status.USAGE, fault) when usage/help/error text was printed.
        """
        if not isinstance(name, str):
            raise TypeError("dispatch() first argument must be a string")
        args = list(args)

        if (command := self.lookup(name)) is None:
            return self._unresolved(name, args)

        try:
            rest = command.options.parse(args)
        except HelpRequested as fault:
            return Dispatch(Status.USAGE, fault)
        except OptionError as fault:
            self.console.print(fault, soft_wrap=True, highlight=False)
            return Dispatch(Status.USAGE, fault)

        if not command.runnable:
            fault = MissingActionError(name, self.suggestions(name))
            self.console.print(fault, soft_wrap=True, highlight=False)
            return Dispatch(Status.USAGE, fault)

        result = command(rest)
        if result is None or result == 0:
            return Dispatch(Status.SUCCESS, result)
        return Dispatch(Status.FAILURE, result)

    def _unresolved(self, name, args):
        if name == "help":
            if len(args) == 1 and args[0]:
                return Dispatch(Status.USAGE, self.help(args[0]))
            self._print_listing()
            return Dispatch(Status.USAGE)
        if not name:
            self._print_listing()
            return Dispatch(Status.USAGE)
        fault = UnknownCommandError(name, self.suggestions(name))
        self.console.print(fault, soft_wrap=True, highlight=False)
        return Dispatch(Status.USAGE, fault)

    def run(self, name, args=(), /):
        """
        Dispatch `name` with `args`; exit with status 2 on any usage path.

        Returns the action's result otherwise.
        """
        status, value = self.dispatch(name, args)
        if status is Status.USAGE:
            sys.exit(Status.USAGE.value)
        return value

    def main(self, argv=Unset, /):
        """
        Program entry point: parse global options, then run the named command.

        Parameters
        - argv:
          • Unset: sys.argv[1:].
          • str: split with shlex.split.
          • Iterable[str]: used as is.

        Behavior
        - Global option help or failure exits with status 2.
        - No command name: the listing is printed and the process exits with 2.
        - Otherwise returns run(argv[0], argv[1:]); pass it to sys.exit().
        """
        if argv is Unset:
            tokens = sys.argv[1:]
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        elif isinstance(argv, Iterable):
            tokens = list(argv)
        else:
            raise TypeError("main() argument must be a string or an iterable of strings")

        try:
            rest = self.options.parse(tokens)
        except HelpRequested:
            sys.exit(Status.USAGE.value)
        except OptionError as fault:
            self.console.print(fault, soft_wrap=True, highlight=False)
            sys.exit(Status.USAGE.value)

        if not rest:
            self._print_listing()
            sys.exit(Status.USAGE.value)
        return self.run(rest[0], rest[1:])


default = Registry()


def register(name, command, /):
    """Register `command` under `name` in the default registry."""
    default.register(name, command)


def lookup(name, /):
    return default.lookup(name)


def dispatch(name, args=(), /):
    return default.dispatch(name, args)


def run(name, args=(), /):
    return default.run(name, args)


def main(argv=Unset, /):
    """Parse sys.argv (or `argv`) and run the named command of the default registry."""
    return default.main(argv)


def print_usage(name="", /):
    default.print_usage(name)


def help(name, /):
    return default.help(name)


__all__ = (
    "Registry",
    "Status",
    "Dispatch",
    "default",
    "register",
    "lookup",
    "dispatch",
    "run",
    "main",
    "print_usage",
    "help",
)
