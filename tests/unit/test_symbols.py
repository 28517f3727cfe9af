#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

import unittest

from src.symbols import SymbolError, SymbolTable


class TestSymbolTable(unittest.TestCase):
    def setUp(self):
        self.table = SymbolTable()

    def test_starts_with_outermost_scope(self):
        self.assertEqual(self.table.depth, 1)
        self.assertEqual(len(self.table), 0)

    def test_declare_returns_increasing_slots(self):
        self.assertEqual(self.table.declare("a", 1), 0)
        self.assertEqual(self.table.declare("b", 2), 1)
        self.table.push_scope()
        self.assertEqual(self.table.declare("c", 3), 2)
        self.assertEqual(len(self.table), 3)

    def test_new_record_is_uninitialized(self):
        slot = self.table.declare("x", 4)
        record = self.table.variables[slot]
        self.assertEqual(record.name, "x")
        self.assertEqual(record.value, 0)
        self.assertEqual(record.declared_at_line, 4)
        self.assertFalse(record.initialized)

    def test_redeclaration_in_same_scope(self):
        self.table.declare("x", 1)
        with self.assertRaises(SymbolError) as cm:
            self.table.declare("x", 2)
        self.assertIn("redeclaration", str(cm.exception))
        self.assertEqual(cm.exception.line, 2)

    def test_shadowing_in_inner_scope(self):
        outer = self.table.declare("x", 1)
        self.table.push_scope()
        inner = self.table.declare("x", 2)
        self.assertNotEqual(outer, inner)
        self.assertEqual(self.table.resolve("x"), inner)
        self.table.pop_scope()
        self.assertEqual(self.table.resolve("x"), outer)

    def test_resolve_walks_outward(self):
        slot = self.table.declare("x", 1)
        self.table.push_scope()
        self.table.push_scope()
        self.assertEqual(self.table.resolve("x"), slot)

    def test_resolve_undeclared(self):
        with self.assertRaises(SymbolError) as cm:
            self.table.resolve("missing", 7, 3)
        self.assertIn("undeclared variable `missing`", str(cm.exception))
        self.assertTrue(str(cm.exception).startswith("7:3:"))

    def test_names_vanish_when_scope_pops(self):
        self.table.push_scope()
        self.table.declare("inner", 1)
        self.table.pop_scope()
        with self.assertRaises(SymbolError):
            self.table.resolve("inner")

    def test_slots_survive_scope_pop(self):
        self.table.push_scope()
        slot = self.table.declare("inner", 1)
        self.table.pop_scope()
        self.table.write(slot, 5)
        self.assertEqual(self.table.read(slot), 5)
        self.assertEqual(self.table.declare("other", 2), slot + 1)

    def test_pop_outermost_scope(self):
        with self.assertRaises(SymbolError) as cm:
            self.table.pop_scope()
        self.assertIn("outermost", str(cm.exception))

    def test_pop_empty_stack(self):
        self.table.scopes.clear()
        with self.assertRaises(SymbolError) as cm:
            self.table.pop_scope()
        self.assertIn("nonexistent", str(cm.exception))

    def test_read_uninitialized(self):
        slot = self.table.declare("x", 1)
        with self.assertRaises(SymbolError) as cm:
            self.table.read(slot)
        self.assertIn("uninitialized variable `x`", str(cm.exception))

    def test_write_then_read(self):
        slot = self.table.declare("x", 1)
        self.table.write(slot, 0)
        self.assertTrue(self.table.variables[slot].initialized)
        self.assertEqual(self.table.read(slot), 0)
        self.table.write(slot, 2.5)
        self.assertEqual(self.table.read(slot), 2.5)


if __name__ == "__main__":
    unittest.main()
