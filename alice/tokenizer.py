#!/usr/bin/env python3
"""
Statement tokenizer for the alice shell.

This module splits raw input lines into statements and arguments. It knows
nothing about commands; it only understands delimiters, quotes and
whitespace.

Design Principles:
- Pure functions with predictable outputs
- Quotes are tracked independently (a double quote inside single quotes is
  literal, and vice versa)
- Unterminated quotes are tolerated, never an error
"""

from typing import List


def split(line: str, delimiters: str, keep_quotes: bool = False) -> List[str]:
    """
    Split a line on any of the delimiter characters, respecting quotes.

    Quote characters are consumed unless keep_quotes is set. Blank entries
    are kept; removing them is up to the caller.

    >>> split("a;b", ";")
    ['a', 'b']
    >>> split("'a;b'", ";")
    ['a;b']
    """
    parts = []
    current = []
    in_single_quote = False
    in_double_quote = False

    for char in line:
        if char == "'" and not in_double_quote:
            in_single_quote = not in_single_quote
            if keep_quotes:
                current.append(char)
        elif char == '"' and not in_single_quote:
            in_double_quote = not in_double_quote
            if keep_quotes:
                current.append(char)
        elif char in delimiters and not in_single_quote and not in_double_quote:
            parts.append(''.join(current))
            current = []
        else:
            current.append(char)

    # An open quote at the end of the line is treated as closed
    parts.append(''.join(current))

    return parts


def split_statements(line: str) -> List[str]:
    """Split a line into trimmed statements on un-quoted semicolons."""
    statements = split(line, ';', keep_quotes=True)
    trim_all(statements)
    return statements


def split_arguments(statement: str) -> List[str]:
    """Split a statement into its command name and arguments on spaces and tabs."""
    return [token for token in split(statement, ' \t') if token]


def trim(text: str) -> str:
    """Return a copy of text without leading and trailing whitespace."""
    return text.strip()


def trim_all(tokens: List[str]) -> None:
    """Trim every token of the list in place."""
    for i, token in enumerate(tokens):
        tokens[i] = token.strip()
