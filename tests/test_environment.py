#!/usr/bin/env python3
"""
Tests for the shell environment.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import io
import unittest
import pytest

from alice.environment import Environment
from alice.errors import DuplicateCommand, DuplicateStore, UnknownStore
from alice.store_api import StoreType


def make_strings():
    return StoreType(key='string', option='string', mnemonic='s',
                     name='string', name_plural='strings')


class TestStores(unittest.TestCase):
    """Test store registration and lookup."""

    def setUp(self):
        """Set up test fixtures."""
        self.env = Environment()
        self.strings = make_strings()

    def test_register_store(self):
        """Test that a registered store is empty and reachable."""
        self.env.register_store(self.strings)
        self.assertTrue(self.env.has_store(self.strings))
        self.assertTrue(self.env.has_store('string'))
        self.assertTrue(self.env.store(self.strings).is_empty())
        self.assertIs(self.env.store('string'), self.env.store(self.strings))

    def test_duplicate_store(self):
        """Test that registering a key twice is an error."""
        self.env.register_store(self.strings)
        with pytest.raises(DuplicateStore):
            self.env.register_store(make_strings())

    def test_unknown_store(self):
        """Test looking up a store that was never registered."""
        self.assertFalse(self.env.has_store('string'))
        with pytest.raises(UnknownStore, match="no store 'string'"):
            self.env.store('string')
        with pytest.raises(KeyError):
            self.env.store_type('string')

    def test_store_types_in_order(self):
        """Test that store types keep registration order."""
        ints = StoreType(key='int', option='int', mnemonic='i', name='int', name_plural='ints')
        self.env.register_store(self.strings)
        self.env.register_store(ints)
        self.assertEqual([t.key for t in self.env.store_types()], ['string', 'int'])
        self.assertIs(self.env.store_type('int'), ints)


class TestCommandsAndCategories(unittest.TestCase):
    """Test the command registry."""

    def setUp(self):
        """Set up test fixtures."""
        self.env = Environment()

    def test_register_command(self):
        """Test registering commands into categories."""
        first, second, third = object(), object(), object()
        self.env.register_command('zeta', 'General', first)
        self.env.register_command('alpha', 'General', second)
        self.env.register_command('read', 'I/O', third)

        self.assertIs(self.env.commands()['zeta'], first)
        self.assertEqual(list(self.env.categories()), ['General', 'I/O'])
        self.assertEqual(self.env.categories()['General'], ('zeta', 'alpha'))

    def test_duplicate_command(self):
        """Test that a command name can only be registered once."""
        self.env.register_command('quit', 'General', object())
        with pytest.raises(DuplicateCommand):
            self.env.register_command('quit', 'Other', object())

    def test_views_are_read_only(self):
        """Test that registries cannot be modified through their views."""
        self.env.register_command('quit', 'General', object())
        with pytest.raises(TypeError):
            self.env.commands()['other'] = object()
        with pytest.raises(TypeError):
            self.env.categories()['General'] = ()


class TestAliasesAndState(unittest.TestCase):
    """Test aliases, quit flag and output routing."""

    def setUp(self):
        """Set up test fixtures."""
        self.env = Environment()

    def test_aliases(self):
        """Test adding and removing alias rules."""
        self.env.add_alias('a', 'b')
        self.env.add_alias('c', 'd')
        self.assertEqual(list(self.env.aliases().items()), [('a', 'b'), ('c', 'd')])
        self.assertTrue(self.env.remove_alias('a'))
        self.assertFalse(self.env.remove_alias('a'))
        self.assertEqual(dict(self.env.aliases()), {'c': 'd'})

    def test_quit(self):
        """Test the quit flag."""
        self.assertFalse(self.env.quit)
        self.env.request_quit()
        self.assertTrue(self.env.quit)

    def test_reroute(self):
        """Test swapping the output sinks."""
        self.assertIs(self.env.out(), sys.stdout)
        self.assertIs(self.env.err(), sys.stderr)

        out, err = io.StringIO(), io.StringIO()
        self.env.reroute(out, err)
        self.env.out().write("hello")
        self.env.err().write("oops")
        self.assertEqual(out.getvalue(), "hello")
        self.assertEqual(err.getvalue(), "oops")


if __name__ == '__main__':
    unittest.main()
