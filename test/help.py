"""
Help rendering tests.

Scope
- Validate the usage line, the Arguments and Options sections and their placeholders.
- Validate help.show filtering and help.compact layout.
- Validate that rendering is free of side effects and that the rich form renders.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from argsmith import Arg, Flag, HelpRenderer, Registry, Required, Value


def _populated(*pairs):
    registry = Registry(["program.name=copy", "help.add=0", *pairs])
    registry.define(Arg("source", "file to read", Required))
    registry.define(Arg("target"))
    registry.define(Flag("--out", "-o", "write here", Value(required=Required, name="file")))
    registry.define(Flag("--mode", "", "pick a mode", Value("fast", choices=("fast", "safe"))))
    registry.define(Flag("", "-v", "talk more"))
    return registry


class TestHelp(TestCase):

    def testFullLayout(self):
        self.assertEqual(_populated().help(), (
            "usage: copy <source> [<target>]\n"
            "Arguments:\n"
            "    <source>    file to read\n"
            "    [<target>]\n"
            "Options:\n"
            "    -o, --out <file>    write here\n"
            "    --mode [<fast|safe>]    pick a mode\n"
            "    -v    talk more\n"
        ))

    def testNonCompactLayoutSeparatesSections(self):
        text = _populated("help.compact=0").help()
        self.assertTrue(text.startswith("usage: copy <source> [<target>]\n\nArguments:\n"))
        self.assertIn("\n\nOptions:\n", text)

    def testCustomTab(self):
        text = _populated("tab=\t").help()
        self.assertIn("\t<source>\tfile to read\n", text)

    def testPositionalsInDeclarationOrder(self):
        registry = Registry("help.add=0,program.name=p")
        for name in ("zeta", "alpha", "mid"):
            registry.define(Arg(name, "", Required))
        self.assertTrue(registry.help().startswith("usage: p <zeta> <alpha> <mid>\n"))

    def testShortBeforeLong(self):
        registry = Registry("help.add=0")
        registry.define(Flag("--verbose", "-v", "talk more"))
        self.assertIn("    -v, --verbose    talk more\n", registry.help())

    def testHelpFlagListed(self):
        self.assertIn("-h, --help    Show this help.", Registry().help())

    def testValueWithoutNameHasNoPlaceholder(self):
        registry = Registry("help.add=0")
        registry.define(Flag("--level", "", "how loud", Value("1")))
        self.assertIn("    --level    how loud\n", registry.help())

    def testSynthesizedEntriesHiddenByDefault(self):
        registry = _populated()
        registry.parse(["copy", "a", "b", "c", "--ghost"])
        text = registry.help()
        self.assertNotIn("--ghost", text)
        self.assertTrue(text.startswith("usage: copy <source> [<target>]\n"))

    def testShowAllListsSynthesizedFlags(self):
        registry = _populated("help.show=2")
        registry.parse(["copy", "a", "--ghost"])
        self.assertIn("    --ghost\n", registry.help())

    def testShowOnlyDescribed(self):
        registry = _populated("help.show=0")
        registry["--bare"]
        text = registry.help()
        self.assertNotIn("[<target>]\n", text.split("Arguments:")[1])
        self.assertNotIn("--bare", text)
        self.assertIn("<source>    file to read", text)

    def testUsageListsEveryNamedPositional(self):
        registry = Registry("help.add=0,help.show=0,program.name=p")
        registry.define(Arg("src", "", Required))
        registry.define(Arg("dst", "file to write"))
        text = registry.help()
        self.assertTrue(text.startswith("usage: p <src> [<dst>]\n"))
        self.assertNotIn("<src>", text.split("Arguments:")[1])

    def testProgramFromArgv(self):
        registry = Registry("help.add=0")
        registry.parse(["./tool"])
        self.assertTrue(registry.help().startswith("usage: ./tool\n"))

    def testRenderingHasNoSideEffects(self):
        registry = _populated()
        flags, args = registry.flags, registry.args
        registry.help()
        self.assertEqual(registry.flags, flags)
        self.assertEqual(registry.args, args)
        self.assertFalse(any(flag.is_set for flag in registry.flags))

    def testRichRenderable(self):
        renderable = HelpRenderer(_populated(), colorful=False).__rich__()
        self.assertIsInstance(renderable, Text)
        self.assertEqual(renderable.plain, _populated().help())

    def testRichRenderablePrints(self):
        console = Console(record=True, width=120)
        console.print(HelpRenderer(_populated()))
        self.assertIn("--out <file>", console.export_text())


if __name__ == "__main__":
    unittest.main()
