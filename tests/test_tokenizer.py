#!/usr/bin/env python3
"""
Tests for the alice statement tokenizer.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest

from alice.tokenizer import split, split_arguments, split_statements, trim, trim_all


class TestSplit(unittest.TestCase):
    """Test quote-aware splitting."""

    def test_split_simple(self):
        """Test splitting on a delimiter."""
        self.assertEqual(split("a;b", ";"), ["a", "b"])
        self.assertEqual(split("a;b;c", ";"), ["a", "b", "c"])

    def test_split_single_quotes(self):
        """Test that single quotes protect the delimiter and are removed."""
        self.assertEqual(split("'a;b'", ";"), ["a;b"])

    def test_split_double_quotes(self):
        """Test that double quotes protect the delimiter and are removed."""
        self.assertEqual(split('x "a;b" y;z', ";"), ["x a;b y", "z"])

    def test_quotes_are_independent(self):
        """Test that a quote of the other kind is literal inside quotes."""
        self.assertEqual(split('"it\'s";x', ";"), ["it's", "x"])
        self.assertEqual(split("'say \"hi\"';x", ";"), ['say "hi"', "x"])

    def test_unterminated_quote(self):
        """Test that an open quote is closed at the end of the line."""
        self.assertEqual(split("'a;b", ";"), ["a;b"])
        self.assertEqual(split('a;"b;c', ";"), ["a", "b;c"])

    def test_empty_input(self):
        """Test splitting an empty line."""
        self.assertEqual(split("", ";"), [""])

    def test_blank_entries_kept(self):
        """Test that empty entries are left to the caller."""
        self.assertEqual(split("a;;b;", ";"), ["a", "", "b", ""])

    def test_several_delimiters(self):
        """Test splitting on any of several characters."""
        self.assertEqual(split("a b\tc", " \t"), ["a", "b", "c"])
        self.assertEqual(split("'a\tb' c", " \t"), ["a\tb", "c"])

    def test_keep_quotes(self):
        """Test keeping the quote characters."""
        self.assertEqual(split("alias 'x;y' z; quit", ";", keep_quotes=True),
                         ["alias 'x;y' z", " quit"])


class TestStatementsAndArguments(unittest.TestCase):
    """Test the helpers used by the dispatch loop."""

    def test_split_statements_trims(self):
        """Test that statements are trimmed."""
        self.assertEqual(split_statements("  store -s ;  quit "), ["store -s", "quit"])

    def test_split_statements_keeps_quotes(self):
        """Test that quotes survive the statement split."""
        self.assertEqual(split_statements('alias "a;b" "c"'), ['alias "a;b" "c"'])

    def test_split_arguments(self):
        """Test splitting a statement into arguments."""
        self.assertEqual(split_arguments('alias "greet (\\w+)"  "print {0}"'),
                         ["alias", "greet (\\w+)", "print {0}"])

    def test_split_arguments_drops_blanks(self):
        """Test that repeated spaces do not produce empty arguments."""
        self.assertEqual(split_arguments("store   -s"), ["store", "-s"])


class TestTrim(unittest.TestCase):
    """Test whitespace trimming."""

    def test_trim_returns_copy(self):
        """Test that trim leaves the original alone."""
        text = "  hello \t"
        self.assertEqual(trim(text), "hello")
        self.assertEqual(text, "  hello \t")

    def test_trim_all_in_place(self):
        """Test trimming a token list in place."""
        tokens = [" a", "b ", " c "]
        result = trim_all(tokens)
        self.assertIsNone(result)
        self.assertEqual(tokens, ["a", "b", "c"])


if __name__ == '__main__':
    unittest.main()
