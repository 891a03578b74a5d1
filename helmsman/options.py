r"""
Helmsman option sets: per-command options on top of argparse.

Overview
- Option: one named option definition (name, usage text, bound value, default text).
- OptionSet: an ordered-by-name collection of options with a usage callback.
  Parsing is delegated to argparse.ArgumentParser; this module only translates
  definitions into parser arguments and parser outcomes into faults.

Option syntax accepted (as understood by argparse)
- "-name value", "-name=value", "--name value", "--name=value"
- boolean options are switches: "-v" / "--v" (no argument), or take an
  explicit value joined by "=": "-v=false", "--v=true"
- parsing stops at the first non-option argument; a leading "--" is dropped
- "-h", "--h", "-help", "--help" request help unless "h"/"help" are defined

Outcomes of parse(arguments)
- success: the remaining positional arguments are returned (also kept in .args)
- help:    the usage callback runs, then HelpRequested propagates
- failure: the usage callback runs, then OptionError propagates with the
           parser's own message (e.g., "unrecognized arguments: -x")

Quick example
    >>> options = OptionSet("export")
    >>> verbose = options.bool("v", False, "cause export to be verbose")
    >>> output = options.string("o", "", "output to a file")
    >>> options.parse(["-v", "-o=out.txt", "data.csv"])
    ['data.csv']
    >>> verbose.value, output.value
    (True, 'out.txt')
"""
import argparse
import re
import sys

from rich.console import Console
from rich.text import Text

from .faults import HelpRequested, OptionError
from .usage import columnize
from .utils import Unset, coalesce, mirror
from .values import (
    BoolValue,
    IntValue,
    Int64Value,
    UintValue,
    Uint64Value,
    FloatValue,
    StringValue,
    DurationValue,
    describe,
    quote,
)

console = Console(stderr=True)

_NAME = re.compile(r"\w[^\s=]*")


class Option:
    """
    A single option definition.

    Attributes
    - name:    the option name without dashes ("v", "output").
    - usage:   one-line description shown in listings.
    - value:   the bound value object (BoolValue, StringValue, custom, ...).
    - default: the value's text when the option was defined.
    - quoted:  True when the default is textual and shown in double quotes.
    - boolean: True when the option is a switch taking no argument.
    """
    __introspectable__ = ("name", "usage", "value", "default", "quoted", "boolean")

    name = mirror("name")
    usage = mirror("usage")
    value = mirror("value")
    default = mirror("default")
    quoted = mirror("quoted")
    boolean = mirror("boolean")

    def __init__(self, name, usage, value, /):
        self._name = name
        self._usage = usage
        self._value = value
        self._default, self._quoted, self._boolean = describe(value)

    @property
    def flag(self):
        """The dashed spelling used in listings: "-v" or "--output"."""
        return ("-" if len(self.name) == 1 else "--") + self.name

    def default_text(self):
        """Return the default as displayed: quoted for textual values."""
        return quote(self.default) if self.quoted else self.default

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "option(%s)" % ", ".join(f"{name}={object!r}" for name, object in self.__rich_repr__())


class _Parser(argparse.ArgumentParser):
    # argparse reports every failure through error(); turn it into a fault.
    def error(self, message):
        raise OptionError(message)

    # "-v=false" on a switch goes to its value-taking twin; a bare "-v" stays a switch.
    def _parse_optional(self, arg_string):
        parsed = super()._parse_optional(arg_string)
        if parsed and isinstance(parsed[0], _Switch) and arg_string.startswith(parsed[1] + "="):
            return (parsed[0].explicit, *parsed[1:])
        return parsed


class _Assign(argparse.Action):
    def __init__(self, option_strings, dest, option, **kwargs):
        self.option = option
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        try:
            self.option.value.set(values)
        except ValueError as error:
            raise argparse.ArgumentError(self, str(error)) from None


class _Switch(_Assign):
    def __init__(self, option_strings, dest, option, **kwargs):
        super().__init__(option_strings, dest, option, **kwargs)
        self.explicit = _Assign(option_strings, dest, option, default=argparse.SUPPRESS)

    def __call__(self, parser, namespace, values, option_string=None):
        try:
            # Built-in booleans store True directly; custom switches get the text.
            if isinstance(self.option.value, BoolValue):
                self.option.value.value = True
            else:
                self.option.value.set("true")
        except ValueError as error:
            raise argparse.ArgumentError(self, str(error)) from None


class _Help(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        raise HelpRequested(option=option_string)


class OptionSet:
    """
    Named set of options owned by one command (or by a registry, for global options).

    Definitions
    - bool/int/int64/uint/uint64/float/string/duration(name, value, usage)
      return a fresh value object; read the parsed result from its .value.
    - *_var(target, name, value, usage, *, dest=Unset) write the default and
      every parsed value to setattr(target, dest); dest defaults to the name
      with "-" replaced by "_".
    - var(value, name, usage) binds any object providing set(text)/__str__().

    Introspection
    - iter(options) yields Option objects sorted by name; lookup(name) finds one.
    - args holds the positional arguments left by the last parse.
    - parsed tells whether parse() completed successfully.

    Usage callback
    - usage is a zero-argument callable run on help or failure. A registry
      installs one rendering the owning command's detail view. When it is not
      set, print_usage() writes "Usage of <name>:" and the option rows.
    """

    def __init__(self, name=Unset, usage=Unset):
        if not isinstance(name, str | Unset):
            raise TypeError("option-set 'name' must be a string")
        if usage is not Unset and not callable(usage):
            raise TypeError("option-set 'usage' must be callable")
        self._name = coalesce(name, "")
        self._usage = usage
        self._options = {}
        self._args = []
        self._parsed = False

    name = mirror("name")
    args = mirror("args")
    parsed = mirror("parsed")

    @property
    def usage(self):
        return self._usage

    @usage.setter
    def usage(self, usage):
        if usage is not Unset and not callable(usage):
            raise TypeError("option-set 'usage' must be callable")
        self._usage = usage

    def __iter__(self):
        return iter([self._options[name] for name in sorted(self._options)])

    def __len__(self):
        return len(self._options)

    def __contains__(self, name):
        return name in self._options

    def __repr__(self):
        return f"option-set(name={self.name!r}, options={sorted(self._options)!r})"

    def lookup(self, name, /):
        """Return the Option registered as `name`, or None."""
        return self._options.get(name)

    def var(self, value, name, usage, /):
        """
        Define an option bound to an arbitrary value object.

        Raises
        - TypeError: value lacks a callable set(), or name/usage are not strings.
        - ValueError: name is malformed or already defined in this set.
        """
        if not callable(getattr(value, "set", None)):
            raise TypeError("option-set value must provide a set() method")
        self._validate(name, usage)
        self._options[name] = option = Option(name, usage, value)
        return option

    def _validate(self, name, usage):
        if not isinstance(name, str):
            raise TypeError("option-set option name must be a string")
        if not isinstance(usage, str):
            raise TypeError("option-set option usage must be a string")
        if not _NAME.fullmatch(name):
            raise ValueError(f"option-set option name {name!r} is malformed")
        if name in self._options:
            raise ValueError(f"option-set option {name!r} is already defined")

    def _define(self, type, name, value, usage, target=Unset, dest=Unset):
        self._validate(name, usage)
        if target is not Unset:
            dest = coalesce(dest, name.replace("-", "_"))
        bound = type(value, target, dest)
        self._options[name] = Option(name, usage, bound)
        return bound

    def bool(self, name, value, usage, /):
        """Define a bool option; returns a BoolValue holding the result."""
        return self._define(BoolValue, name, value, usage)

    def bool_var(self, target, name, value, usage, /, *, dest=Unset):
        """Define a bool option stored at setattr(target, dest)."""
        self._define(BoolValue, name, value, usage, target, dest)

    def int(self, name, value, usage, /):
        """Define an int option; returns an IntValue holding the result."""
        return self._define(IntValue, name, value, usage)

    def int_var(self, target, name, value, usage, /, *, dest=Unset):
        self._define(IntValue, name, value, usage, target, dest)

    def int64(self, name, value, usage, /):
        """Define an int64 option; returns an Int64Value holding the result."""
        return self._define(Int64Value, name, value, usage)

    def int64_var(self, target, name, value, usage, /, *, dest=Unset):
        self._define(Int64Value, name, value, usage, target, dest)

    def uint(self, name, value, usage, /):
        """Define a uint option; returns a UintValue holding the result."""
        return self._define(UintValue, name, value, usage)

    def uint_var(self, target, name, value, usage, /, *, dest=Unset):
        self._define(UintValue, name, value, usage, target, dest)

    def uint64(self, name, value, usage, /):
        """Define a uint64 option; returns a Uint64Value holding the result."""
        return self._define(Uint64Value, name, value, usage)

    def uint64_var(self, target, name, value, usage, /, *, dest=Unset):
        self._define(Uint64Value, name, value, usage, target, dest)

    def float(self, name, value, usage, /):
        """Define a float option; returns a FloatValue holding the result."""
        return self._define(FloatValue, name, value, usage)

    def float_var(self, target, name, value, usage, /, *, dest=Unset):
        self._define(FloatValue, name, value, usage, target, dest)

    def string(self, name, value, usage, /):
        """Define a string option; returns a StringValue holding the result."""
        return self._define(StringValue, name, value, usage)

    def string_var(self, target, name, value, usage, /, *, dest=Unset):
        self._define(StringValue, name, value, usage, target, dest)

    def duration(self, name, value, usage, /):
        """Define a duration option (timedelta); returns a DurationValue."""
        return self._define(DurationValue, name, value, usage)

    def duration_var(self, target, name, value, usage, /, *, dest=Unset):
        self._define(DurationValue, name, value, usage, target, dest)

    def set(self, name, text, /):
        """
        Set an option from text as if it had been given on the command line.

        Raises
        - KeyError: no such option.
        - ValueError: the value rejects the text.
        """
        try:
            option = self._options[name]
        except KeyError:
            raise KeyError(f"no such option {name!r}") from None
        option.value.set(text)

    def print_usage(self):
        """Run the usage callback, or print the default listing when none is set."""
        if self._usage is not Unset:
            self._usage()
            return

        text = Text(f"Usage of {self.name}:\n" if self.name else "Usage:\n")
        text.append(columnize([(option.flag + "=" + option.default_text(), option.usage) for option in self]))
        console.print(text, soft_wrap=True, highlight=False, end="")

    def _parser(self):
        parser = _Parser(prog=self.name or None, add_help=False, allow_abbrev=False)
        for index, option in enumerate(self):
            strings = ["-" + option.name, "--" + option.name]
            if option.boolean:
                parser.add_argument(
                    *strings, action=_Switch, nargs=0, option=option, dest=f"option{index}", default=argparse.SUPPRESS
                )
            else:
                parser.add_argument(
                    *strings, action=_Assign, option=option, dest=f"option{index}", default=argparse.SUPPRESS
                )
        for name in ("h", "help"):
            if name not in self._options:
                parser.add_argument("-" + name, "--" + name, action=_Help, nargs=0, default=argparse.SUPPRESS)
        parser.add_argument("arguments", nargs=argparse.REMAINDER)
        return parser

    def parse(self, arguments=Unset, /):
        """
        Parse `arguments` (default: sys.argv[1:]) and return the remaining positionals.

        Raises
        - HelpRequested: a help option was given; usage has been printed.
        - OptionError: the parser rejected the arguments; usage has been printed.
        - TypeError: arguments is not an iterable of strings.
        """
        arguments = sys.argv[1:] if arguments is Unset else list(arguments)
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError("parse() argument must be an iterable of strings")

        self._parsed = False
        try:
            namespace = self._parser().parse_args(arguments)
        except (HelpRequested, OptionError):
            self.print_usage()
            raise

        rest = list(namespace.arguments)
        if rest[:1] == ["--"]:
            del rest[0]
        self._args = rest
        self._parsed = True
        return self.args


__all__ = (
    "Option",
    "OptionSet",
)
