"""
Utilities tests (Unset, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argsmith.utils import Unset, UnsetType, coalesce, mirror, rename


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)


class TestHelpers(TestCase):

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(Unset))

    def testRenameFunctionForm(self):
        def f():
            pass
        rename(f, "g")
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testRenameDecoratorForm(self):
        @rename("g")
        def f():
            pass
        self.assertEqual(f.__name__, "g")

    def testRenameArity(self):
        with self.assertRaises(TypeError):
            rename()

    def testMirrorReturnsSnapshot(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [object()]

        holder = Holder()
        snapshot = holder.items
        self.assertIsInstance(snapshot, tuple)
        self.assertIs(snapshot[0], holder._items[0])
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == "__main__":
    unittest.main()
