r"""
Helmsman option values: typed storage behind every option.

Overview
- Every option of an OptionSet is bound to a value object. The parser hands the
  raw text of an option to value.set(text); the value converts it and stores the
  result, either on itself (.value) or on a caller supplied target attribute.
- str(value) renders the current value in the same textual form the parser
  accepts. The option set captures it once, at definition time, as the default
  shown in usage listings.
- Each value carries two tags consulted by the usage renderer and the parser:
  • quoted:  the default is textual and is rendered in double quotes.
  • boolean: the option is a presence switch and takes no argument.

Provided types
- BoolValue      1 t T TRUE true True / 0 f F FALSE false False
- IntValue       signed 64-bit, base prefixes 0x/0o/0b accepted
- Int64Value     same range as IntValue
- UintValue      unsigned 64-bit
- Uint64Value    same range as UintValue
- FloatValue     Python float, rendered in shortest form ("1.5", "1e+06")
- StringValue    any text, quoted in listings
- DurationValue  datetime.timedelta from "300ms", "1h30m", "-1.5h"

Custom values
- Anything with set(text) and __str__() can be bound via OptionSet.var();
  the quoted/boolean tags are optional attributes defaulting to False.
"""
import decimal
import math
import re
from datetime import timedelta
from fractions import Fraction

from .utils import Unset

_BOOLEANS = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}

# Duration units expressed in microseconds (timedelta resolution).
_UNITS = {
    "ns": Fraction(1, 1000),
    "us": Fraction(1),
    "µs": Fraction(1),  # U+00B5 micro sign
    "μs": Fraction(1),  # U+03BC greek mu
    "ms": Fraction(1000),
    "s": Fraction(1000 ** 2),
    "m": Fraction(60 * 1000 ** 2),
    "h": Fraction(60 * 60 * 1000 ** 2),
}

_COMPONENT = re.compile(r"(\d*(?:\.\d*)?)(ns|us|µs|μs|ms|s|m|h)")

_INFINITY = re.compile(r"[+-]?inf(?:inity)?", re.IGNORECASE)


def _bare(text):
    # int() and float() tolerate surrounding whitespace; option text may not carry any.
    if text != text.strip():
        raise ValueError(text)
    return text


class Value:
    """
    Base for the built-in typed values.

    Storage
    - Without a target, the parsed value lives on the object (self.value).
    - With a target, every write goes to setattr(target, dest, value); reads come
      back from the target, so the caller's attribute is the single source of truth.

    Subclasses implement convert(text) and format(value).
    """
    kind = "value"
    quoted = False
    boolean = False

    def __init__(self, default, /, target=Unset, dest=Unset):
        if target is not Unset and not isinstance(dest, str):
            raise TypeError(f"{self.kind} value 'dest' must be a string")
        self._target = target
        self._dest = dest
        self._value = Unset
        self.value = self.check(default)

    @property
    def value(self):
        if self._target is not Unset:
            return getattr(self._target, self._dest)
        return self._value

    @value.setter
    def value(self, value):
        if self._target is not Unset:
            setattr(self._target, self._dest, value)
        else:
            self._value = value

    def check(self, value):
        """Validate a default given at definition time; return it normalized."""
        return value

    def convert(self, text):
        raise NotImplementedError

    def format(self, value):
        return str(value)

    def set(self, text):
        self.value = self.convert(text)

    def __str__(self):
        return self.format(self.value)

    def __repr__(self):
        return f"{self.kind}-value({self})"


class BoolValue(Value):
    kind = "bool"
    boolean = True

    def check(self, value):
        if not isinstance(value, bool):
            raise TypeError("bool value default must be a bool")
        return value

    def convert(self, text):
        try:
            return _BOOLEANS[text]
        except KeyError:
            raise ValueError(f"invalid boolean {text!r}") from None

    def format(self, value):
        return "true" if value else "false"


class IntValue(Value):
    kind = "int"
    signed = True
    bits = 64

    @property
    def bounds(self):
        if self.signed:
            return -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        return 0, (1 << self.bits) - 1

    def check(self, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{self.kind} value default must be an integer")
        low, high = self.bounds
        if not low <= value <= high:
            raise ValueError(f"{self.kind} value default {value} is out of range")
        return value

    def convert(self, text):
        try:
            number = int(_bare(text), 0)
        except ValueError:
            raise ValueError(f"invalid {self.kind} {text!r}") from None
        low, high = self.bounds
        if not low <= number <= high:
            raise ValueError(f"{self.kind} {text!r} is out of range")
        return number


class Int64Value(IntValue):
    kind = "int64"


class UintValue(IntValue):
    kind = "uint"
    signed = False


class Uint64Value(UintValue):
    kind = "uint64"


class FloatValue(Value):
    kind = "float"

    def check(self, value):
        if not isinstance(value, int | float) or isinstance(value, bool):
            raise TypeError("float value default must be a number")
        return float(value)

    def convert(self, text):
        try:
            number = float(_bare(text))
        except ValueError:
            raise ValueError(f"invalid float {text!r}") from None
        # Overflowing literals such as "1e400" must not turn into infinities.
        if math.isinf(number) and not _INFINITY.fullmatch(text):
            raise ValueError(f"float {text!r} is out of range")
        return number

    def format(self, value):
        return format_float(value)


class StringValue(Value):
    kind = "string"
    quoted = True

    def check(self, value):
        if not isinstance(value, str):
            raise TypeError("string value default must be a string")
        return value

    def convert(self, text):
        return text


class DurationValue(Value):
    kind = "duration"

    def check(self, value):
        if not isinstance(value, timedelta):
            raise TypeError("duration value default must be a timedelta")
        return value

    def convert(self, text):
        return parse_duration(text)

    def format(self, value):
        return format_duration(value)


def format_float(value, /):
    """
    Render a float in its shortest round-tripping form.

    Decimal exponents below -4 or at/above 6 switch to exponent notation with at
    least two exponent digits, otherwise plain notation without a trailing ".0":
    0.0 -> "0", 1.5 -> "1.5", 1e6 -> "1e+06", 0.00001 -> "1e-05".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1, value) < 0 else "0"

    sign, digits, exponent = decimal.Decimal(repr(value)).normalize().as_tuple()
    count = len(digits)
    point = count + exponent  # position of the decimal point within the digits
    if point - 1 < -4 or point - 1 >= 6:
        return f"{value:.{count - 1}e}"
    return f"{value:.{max(count - point, 0)}f}"


def parse_duration(text, /):
    """
    Parse a duration such as "1h30m", "1.5s", "-300ms" into a timedelta.

    Rules
    - an optional sign followed by one or more number+unit components;
    - units: ns, us, µs, μs, ms, s, m, h;
    - the bare string "0" is accepted as zero.

    Raises
    - ValueError when the text is empty, malformed, or a component lacks a unit.
    """
    if not isinstance(text, str):
        raise TypeError("parse_duration() argument must be a string")

    body = text
    negative = body.startswith("-")
    if body[:1] in ("-", "+"):
        body = body[1:]

    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")

    total = Fraction(0)
    index = 0
    while index < len(body):
        match = _COMPONENT.match(body, index)
        if not match or match.group(1) in ("", "."):
            if re.match(r"\d*\.?\d*$", body[index:]):
                raise ValueError(f"missing unit in duration {text!r}")
            raise ValueError(f"invalid duration {text!r}")
        total += Fraction(match.group(1)) * _UNITS[match.group(2)]
        index = match.end()

    micros = round(total)
    try:
        return timedelta(microseconds=-micros if negative else micros)
    except OverflowError:
        raise ValueError(f"duration {text!r} is out of range") from None


def _decimal(amount, unit):
    whole, fraction = divmod(amount, unit)
    if not fraction:
        return str(whole)
    return f"{whole}.{fraction:0{len(str(unit)) - 1}d}".rstrip("0")


def format_duration(value, /):
    """
    Render a timedelta as "1h30m0s", "1.5s", "500ms", "10µs" or "0s".

    Hours and minutes only appear once the duration reaches them; sub-second
    durations use ms/µs.
    """
    micros = (value.days * 86400 + value.seconds) * 1000 ** 2 + value.microseconds
    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros == 0:
        return "0s"
    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < 1000 ** 2:
        return f"{sign}{_decimal(micros, 1000)}ms"

    hours, micros = divmod(micros, 3600 * 1000 ** 2)
    minutes, micros = divmod(micros, 60 * 1000 ** 2)
    text = _decimal(micros, 1000 ** 2) + "s"
    if hours or minutes:
        text = f"{minutes}m" + text
    if hours:
        text = f"{hours}h" + text
    return sign + text


def quote(text, /):
    """Double-quote text, escaping backslashes, quotes and control characters."""
    escaped = []
    for char in text:
        match char:
            case "\\" | '"':
                escaped.append("\\" + char)
            case "\n":
                escaped.append("\\n")
            case "\t":
                escaped.append("\\t")
            case "\r":
                escaped.append("\\r")
            case _ if not char.isprintable():
                escaped.append(f"\\x{ord(char):02x}" if ord(char) < 0x100 else f"\\u{ord(char):04x}")
            case _:
                escaped.append(char)
    return '"' + "".join(escaped) + '"'


def describe(value, /):
    """Return (text, quoted, boolean) for any value object, built-in or custom."""
    return (
        str(value),
        bool(getattr(value, "quoted", False)),
        bool(getattr(value, "boolean", False)),
    )


__all__ = (
    "Value",
    "BoolValue",
    "IntValue",
    "Int64Value",
    "UintValue",
    "Uint64Value",
    "FloatValue",
    "StringValue",
    "DurationValue",
    "format_float",
    "format_duration",
    "parse_duration",
    "quote",
)
