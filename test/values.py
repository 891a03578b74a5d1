"""
Values module behavioral tests (conversion, ranges, default rendering).

Scope
- Validate text conversion of every built-in value type.
- Validate integer ranges (signed/unsigned 64-bit) and base prefixes.
- Validate shortest float rendering and duration parsing/rendering.
- Validate target binding (writes go to the caller's attribute).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import unittest
from datetime import timedelta
from types import SimpleNamespace
from unittest import TestCase

from helmsman.values import (
    BoolValue,
    IntValue,
    Int64Value,
    UintValue,
    Uint64Value,
    FloatValue,
    StringValue,
    DurationValue,
    format_float,
    format_duration,
    parse_duration,
    quote,
)


class TestBoolValue(TestCase):
    """Behavioral tests for BoolValue."""

    def testAcceptedSpellings(self):
        value = BoolValue(False)
        for text in ("1", "t", "T", "TRUE", "true", "True"):
            value.set(text)
            self.assertIs(value.value, True)
        for text in ("0", "f", "F", "FALSE", "false", "False"):
            value.set(text)
            self.assertIs(value.value, False)

    def testRejectsOtherText(self):
        value = BoolValue(False)
        with self.assertRaises(ValueError):
            value.set("yes")

    def testRendersLowercase(self):
        self.assertEqual(str(BoolValue(False)), "false")
        self.assertEqual(str(BoolValue(True)), "true")

    def testTags(self):
        self.assertTrue(BoolValue.boolean)
        self.assertFalse(BoolValue.quoted)

    def testNonBoolDefaultRaises(self):
        with self.assertRaises(TypeError):
            BoolValue(1)


class TestIntegerValues(TestCase):
    """Behavioral tests for IntValue, Int64Value, UintValue and Uint64Value."""

    def testBasePrefixes(self):
        value = IntValue(0)
        value.set("0x10")
        self.assertEqual(value.value, 16)
        value.set("0o17")
        self.assertEqual(value.value, 15)
        value.set("0b101")
        self.assertEqual(value.value, 5)
        value.set("-42")
        self.assertEqual(value.value, -42)

    def testSignedBounds(self):
        value = Int64Value(0)
        value.set(str(2 ** 63 - 1))
        self.assertEqual(value.value, 2 ** 63 - 1)
        with self.assertRaises(ValueError):
            value.set(str(2 ** 63))
        with self.assertRaises(ValueError):
            value.set(str(-2 ** 63 - 1))

    def testUnsignedBounds(self):
        value = Uint64Value(0)
        value.set("18446744073709551615")
        self.assertEqual(value.value, 2 ** 64 - 1)
        with self.assertRaises(ValueError):
            UintValue(0).set("-1")

    def testGarbageRaises(self):
        with self.assertRaises(ValueError):
            IntValue(0).set("twelve")

    def testSurroundingWhitespaceRaises(self):
        for text in (" 5", "5 ", "\t5\n"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    IntValue(0).set(text)

    def testDefaultOutOfRangeRaises(self):
        with self.assertRaises(ValueError):
            UintValue(-1)

    def testBoolDefaultRejected(self):
        with self.assertRaises(TypeError):
            IntValue(True)

    def testRendersDecimal(self):
        self.assertEqual(str(IntValue(3)), "3")
        self.assertEqual(str(Uint64Value(255)), "255")


class TestFloatValue(TestCase):
    """Behavioral tests for FloatValue and format_float."""

    def testShortestPlainForm(self):
        self.assertEqual(format_float(1.5), "1.5")
        self.assertEqual(format_float(2.0), "2")
        self.assertEqual(format_float(100.0), "100")
        self.assertEqual(format_float(123456.0), "123456")
        self.assertEqual(format_float(0.0001), "0.0001")
        self.assertEqual(format_float(-0.25), "-0.25")

    def testExponentForm(self):
        self.assertEqual(format_float(1e6), "1e+06")
        self.assertEqual(format_float(0.00001), "1e-05")
        self.assertEqual(format_float(1.25e-7), "1.25e-07")
        self.assertEqual(format_float(1e21), "1e+21")

    def testSpecialValues(self):
        self.assertEqual(format_float(0.0), "0")
        self.assertEqual(format_float(-0.0), "-0")
        self.assertEqual(format_float(math.inf), "+Inf")
        self.assertEqual(format_float(-math.inf), "-Inf")
        self.assertEqual(format_float(math.nan), "NaN")

    def testIntegerDefaultWidened(self):
        value = FloatValue(3)
        self.assertIsInstance(value.value, float)
        self.assertEqual(str(value), "3")

    def testConversion(self):
        value = FloatValue(0.0)
        value.set("2.5")
        self.assertEqual(value.value, 2.5)
        with self.assertRaises(ValueError):
            value.set("two")

    def testOverflowRaises(self):
        value = FloatValue(1.0)
        for text in ("1e400", "-1e400"):
            with self.subTest(text=text):
                with self.assertRaisesRegex(ValueError, "out of range"):
                    value.set(text)
        self.assertEqual(value.value, 1.0)

    def testExplicitInfinityAccepted(self):
        value = FloatValue(0.0)
        value.set("+Inf")
        self.assertEqual(value.value, math.inf)
        value.set("-infinity")
        self.assertEqual(value.value, -math.inf)

    def testSurroundingWhitespaceRaises(self):
        with self.assertRaises(ValueError):
            FloatValue(0.0).set(" 2.5")


class TestStringValue(TestCase):
    """Behavioral tests for StringValue and quote."""

    def testStoresTextAsIs(self):
        value = StringValue("")
        value.set("out.txt")
        self.assertEqual(value.value, "out.txt")
        self.assertTrue(StringValue.quoted)

    def testQuote(self):
        self.assertEqual(quote(""), '""')
        self.assertEqual(quote("plain"), '"plain"')
        self.assertEqual(quote('say "hi"'), '"say \\"hi\\""')
        self.assertEqual(quote("a\\b"), '"a\\\\b"')
        self.assertEqual(quote("tab\there"), '"tab\\there"')
        self.assertEqual(quote("\x00"), '"\\x00"')


class TestDurations(TestCase):
    """Behavioral tests for parse_duration, format_duration and DurationValue."""

    def testParseComponents(self):
        self.assertEqual(parse_duration("1h30m"), timedelta(hours=1, minutes=30))
        self.assertEqual(parse_duration("300ms"), timedelta(milliseconds=300))
        self.assertEqual(parse_duration("1.5s"), timedelta(seconds=1.5))
        self.assertEqual(parse_duration("-1.5h"), -timedelta(hours=1.5))
        self.assertEqual(parse_duration("2000ns"), timedelta(microseconds=2))
        self.assertEqual(parse_duration("7µs"), timedelta(microseconds=7))
        self.assertEqual(parse_duration("7us"), timedelta(microseconds=7))

    def testParseZero(self):
        self.assertEqual(parse_duration("0"), timedelta(0))
        self.assertEqual(parse_duration("0s"), timedelta(0))

    def testMissingUnit(self):
        with self.assertRaisesRegex(ValueError, "missing unit"):
            parse_duration("5")
        with self.assertRaisesRegex(ValueError, "missing unit"):
            parse_duration("1h5")

    def testOutOfRangeDuration(self):
        for text in ("99999999999999h", "-99999999999999h"):
            with self.subTest(text=text):
                with self.assertRaisesRegex(ValueError, "out of range"):
                    parse_duration(text)

    def testInvalidDuration(self):
        for text in ("", "-", "1x", "h", "1h 2m"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_duration(text)

    def testFormat(self):
        self.assertEqual(format_duration(timedelta(0)), "0s")
        self.assertEqual(format_duration(timedelta(microseconds=10)), "10µs")
        self.assertEqual(format_duration(timedelta(milliseconds=500)), "500ms")
        self.assertEqual(format_duration(timedelta(microseconds=1500)), "1.5ms")
        self.assertEqual(format_duration(timedelta(seconds=1.5)), "1.5s")
        self.assertEqual(format_duration(timedelta(minutes=2)), "2m0s")
        self.assertEqual(format_duration(timedelta(hours=1, minutes=30)), "1h30m0s")
        self.assertEqual(format_duration(-timedelta(seconds=1)), "-1s")

    def testValueRendersDefault(self):
        value = DurationValue(timedelta(seconds=90))
        self.assertEqual(str(value), "1m30s")
        value.set("250ms")
        self.assertEqual(value.value, timedelta(milliseconds=250))

    def testNonTimedeltaDefaultRaises(self):
        with self.assertRaises(TypeError):
            DurationValue(5)


class TestTargetBinding(TestCase):
    """Behavioral tests for values bound to a target attribute."""

    def testDefaultWrittenImmediately(self):
        settings = SimpleNamespace()
        StringValue("a.txt", settings, "output")
        self.assertEqual(settings.output, "a.txt")

    def testParsedValueWrittenToTarget(self):
        settings = SimpleNamespace()
        value = IntValue(1, settings, "count")
        value.set("7")
        self.assertEqual(settings.count, 7)
        self.assertEqual(value.value, 7)

    def testTargetChangesAreVisible(self):
        settings = SimpleNamespace()
        value = StringValue("x", settings, "name")
        settings.name = "y"
        self.assertEqual(str(value), "y")

    def testDestMustBeString(self):
        with self.assertRaises(TypeError):
            StringValue("x", SimpleNamespace())


if __name__ == "__main__":
    unittest.main()
