"""
Data model tests (Value, Arg, Flag).

Scope
- Validate construction defaults and validation of names, descriptions and choices.
- Validate binding semantics (is_set / is_defined).
- Validate flag keys, alias validity rules and sentinels.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argsmith import Arg, Flag, Required, Value


class TestValue(TestCase):
    """Behavioral tests for Value."""

    def testDefaultsAreUnsetAndUnconstrained(self):
        v = Value()
        self.assertEqual(v.text, "")
        self.assertFalse(v.required)
        self.assertFalse(v.is_set)
        self.assertEqual(v.choices, ())
        self.assertTrue(v.empty)

    def testDefaultTextDoesNotCountAsSet(self):
        v = Value("3", name="level")
        self.assertEqual(v.text, "3")
        self.assertFalse(v.is_set)

    def testBindMarksSet(self):
        v = Value(required=Required)
        v.bind("out.txt")
        self.assertEqual(v.text, "out.txt")
        self.assertTrue(v.is_set)

    def testChoicesKeepOrder(self):
        v = Value(choices=["slow", "fast"])
        self.assertEqual(v.choices, ("slow", "fast"))
        self.assertEqual(v.choices_text(), "slow|fast")
        self.assertEqual(v.choices_text(full=False), "slow|fast|...")

    def testChoicesTextEmptyWithoutChoices(self):
        self.assertEqual(Value().choices_text(), "")

    def testDuplicateChoicesRejected(self):
        with self.assertRaises(ValueError):
            Value(choices=("a", "a"))

    def testEmptyChoiceRejected(self):
        with self.assertRaises(ValueError):
            Value(choices=("a", ""))

    def testStringChoicesRejected(self):
        with self.assertRaises(TypeError):
            Value(choices="abc")

    def testNonStringDefaultRejected(self):
        with self.assertRaises(TypeError):
            Value(3)

    def testAcceptsFollowsChoices(self):
        v = Value(choices=("a", "b"))
        self.assertTrue(v.accepts("a"))
        self.assertFalse(v.accepts("c"))
        self.assertTrue(Value().accepts("anything"))

    def testBindDoesNotEnforceChoices(self):
        v = Value(choices=("a", "b"))
        v.bind("c")
        self.assertEqual(v.text, "c")
        self.assertTrue(v.is_set)

    def testRepr(self):
        self.assertTrue(repr(Value("x")).startswith("value("))


class TestArg(TestCase):
    """Behavioral tests for Arg."""

    def testArgIsAValue(self):
        self.assertIsInstance(Arg("input"), Value)

    def testConstructorOrder(self):
        a = Arg("input", "file to read", Required, "default.txt")
        self.assertEqual(a.name, "input")
        self.assertEqual(a.description, "file to read")
        self.assertTrue(a.required)
        self.assertEqual(a.text, "default.txt")
        self.assertFalse(a.is_defined)

    def testBindMarksDefined(self):
        a = Arg("input")
        a.bind("a.txt")
        self.assertTrue(a.is_defined)
        self.assertTrue(a.is_set)

    def testSentinelIsInert(self):
        s = Arg.sentinel()
        self.assertEqual(s.name, "")
        self.assertFalse(s.is_defined)
        self.assertFalse(s.is_set)

    def testRepr(self):
        self.assertTrue(repr(Arg("input")).startswith("arg("))


class TestFlag(TestCase):
    """Behavioral tests for Flag."""

    def testFlagWithoutValue(self):
        f = Flag("--verbose", "-v", "talk more")
        self.assertFalse(f.has_value)
        self.assertFalse(f.is_set)
        self.assertFalse(f.is_defined)
        self.assertIsNone(f.callback)
        self.assertIsInstance(f.value, Value)

    def testFlagWithValue(self):
        v = Value(required=Required, name="file")
        f = Flag("--out", "-o", "write here", v)
        self.assertTrue(f.has_value)
        self.assertIs(f.value, v)

    def testKeyIsShortThenLong(self):
        self.assertEqual(Flag("--out", "-o").key, "-o--out")
        self.assertEqual(Flag("--out").key, "--out")
        self.assertEqual(Flag(short="-o").key, "-o")

    def testValidity(self):
        self.assertFalse(Flag().is_valid())
        self.assertTrue(Flag("--out", "-o").is_valid())
        self.assertTrue(Flag(short="-o").is_valid())
        self.assertFalse(Flag("out").is_valid())
        self.assertFalse(Flag("--").is_valid())
        self.assertFalse(Flag(short="-ab").is_valid())
        self.assertFalse(Flag(short="--").is_valid())

    def testSentinelHasNoAliases(self):
        s = Flag.sentinel()
        self.assertEqual((s.long, s.short), ("", ""))
        self.assertFalse(s.is_valid())

    def testNonCallableCallbackRejected(self):
        with self.assertRaises(TypeError):
            Flag("--go", callback="nope")

    def testNonValueRejected(self):
        with self.assertRaises(TypeError):
            Flag("--go", value="x")


if __name__ == "__main__":
    unittest.main()
