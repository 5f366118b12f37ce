#!/usr/bin/env python3
"""
Tests for the per-type value store.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
import pytest

from alice.store import Store
from alice.errors import OutOfRange


class TestStore(unittest.TestCase):
    """Test Store operations and invariants."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = Store("string")

    def test_new_store_is_empty(self):
        """Test the initial state."""
        self.assertTrue(self.store.is_empty())
        self.assertEqual(self.store.current_index(), -1)
        self.assertEqual(self.store.all(), ())
        self.assertEqual(len(self.store), 0)

    def test_append_makes_current(self):
        """Test that every append moves the current pointer."""
        for count, value in enumerate(["a", "b", "c"], 1):
            index = self.store.append(value)
            self.assertEqual(index, count - 1)
            self.assertEqual(self.store.current_index(), count - 1)
            self.assertEqual(self.store.current(), value)
        self.assertFalse(self.store.is_empty())

    def test_all_preserves_order(self):
        """Test insertion order."""
        for value in ["x", "y", "z"]:
            self.store.append(value)
        self.assertEqual(self.store.all(), ("x", "y", "z"))
        self.assertEqual(list(self.store), ["x", "y", "z"])

    def test_clear(self):
        """Test clearing a non-empty store."""
        self.store.append("a")
        self.store.append("b")
        self.store.clear()
        self.assertTrue(self.store.is_empty())
        self.assertEqual(self.store.current_index(), -1)
        with pytest.raises(OutOfRange):
            self.store.current()

    def test_current_on_empty(self):
        """Test that the current value of an empty store is an error."""
        with pytest.raises(OutOfRange, match="no string in store"):
            self.store.current()

    def test_out_of_range_is_index_error(self):
        """Test that OutOfRange can be caught as IndexError."""
        with pytest.raises(IndexError):
            self.store.at(0)

    def test_at(self):
        """Test indexed access."""
        self.store.append("a")
        self.store.append("b")
        self.assertEqual(self.store.at(0), "a")
        self.assertEqual(self.store.at(1), "b")
        with pytest.raises(OutOfRange):
            self.store.at(2)
        with pytest.raises(OutOfRange):
            self.store.at(-1)

    def test_set_current_index(self):
        """Test moving the current pointer."""
        self.store.append("a")
        self.store.append("b")
        self.store.set_current_index(0)
        self.assertEqual(self.store.current(), "a")
        with pytest.raises(OutOfRange):
            self.store.set_current_index(2)
        self.assertEqual(self.store.current_index(), 0)

    def test_set_current(self):
        """Test replacing the current value."""
        self.store.append("a")
        self.store.append("b")
        self.store.set_current_index(0)
        self.store.set_current("c")
        self.assertEqual(self.store.all(), ("c", "b"))

        with pytest.raises(OutOfRange):
            Store("empty").set_current("x")

    def test_append_after_clear(self):
        """Test that a cleared store starts counting from zero."""
        self.store.append("a")
        self.store.clear()
        self.assertEqual(self.store.append("b"), 0)
        self.assertEqual(self.store.current(), "b")


if __name__ == '__main__':
    unittest.main()
