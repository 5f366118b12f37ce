#!/usr/bin/env python3
"""
Exceptions raised by the alice shell engine.

Registration errors (duplicate or unknown stores and commands) indicate a
mistake in how the shell was assembled and propagate to the caller.
Everything else is caught by the dispatch loop and reported as a single
``[e]`` line on the error sink.
"""


class AliceError(Exception):
    """Base class for all alice errors."""


class DuplicateStore(AliceError):
    """A store type with the same key is already registered."""


class UnknownStore(AliceError, KeyError):
    """No store type with the requested key was registered."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return Exception.__str__(self)


class DuplicateCommand(AliceError):
    """A command with the same name is already registered."""


class OutOfRange(AliceError, IndexError):
    """A store was accessed while empty or with an invalid index."""


class Unimplemented(AliceError, NotImplementedError):
    """A read, write or convert capability was used without being provided."""


class ParseFailed(AliceError):
    """Command-line arguments could not be parsed."""


class CallForHelp(AliceError):
    """The help flag was given; usage should be printed instead of running."""


class AliasRecursionError(AliceError):
    """Alias rewriting did not settle within the configured bound."""

    def __init__(self, line: str, max_depth: int):
        super().__init__(f"alias expansion of '{line}' exceeded {max_depth} rewrites")
        self.line = line
        self.max_depth = max_depth
