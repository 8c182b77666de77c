"""
Options tests (option-string micro-format and defaults).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argsmith import SHOW_ALL, SHOW_DEFINED, Options


class TestOptions(TestCase):

    def testDefaults(self):
        options = Options()
        self.assertEqual(options.program_name, "")
        self.assertEqual(options.tab, "    ")
        self.assertFalse(options.strict)
        self.assertTrue(options.help_add)
        self.assertTrue(options.help_compact)
        self.assertEqual(options.help_show, SHOW_DEFINED)

    def testParseString(self):
        options = Options.parse("program.name=my program name,tab=  ,help.show=2,help.add=false")
        self.assertEqual(options.program_name, "my program name")
        self.assertEqual(options.tab, "  ")
        self.assertEqual(options.help_show, SHOW_ALL)
        self.assertFalse(options.help_add)

    def testParseList(self):
        options = Options.parse(["program.name=a, b", "tab=\t", "mode.strict=1", "help.compact=off"])
        self.assertEqual(options.program_name, "a, b")
        self.assertEqual(options.tab, "\t")
        self.assertTrue(options.strict)
        self.assertFalse(options.help_compact)

    def testValueKeepsLaterEquals(self):
        self.assertEqual(Options.parse("program.name=a=b").program_name, "a=b")

    def testEmptyStringGivesDefaults(self):
        self.assertEqual(Options.parse(""), Options())

    def testUnknownKeyRejected(self):
        with self.assertRaises(ValueError):
            Options.parse("colour=red")

    def testMissingEqualsRejected(self):
        with self.assertRaises(ValueError):
            Options.parse("mode.strict")

    def testBadBooleanRejected(self):
        with self.assertRaises(ValueError):
            Options.parse("help.add=maybe")

    def testHelpShowOutOfRangeRejected(self):
        with self.assertRaises(ValueError):
            Options.parse("help.show=7")

    def testNonIterableRejected(self):
        with self.assertRaises(TypeError):
            Options.parse(42)

    def testOptionsAreImmutable(self):
        with self.assertRaises(AttributeError):
            Options().strict = True


if __name__ == "__main__":
    unittest.main()
