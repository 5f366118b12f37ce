"""
alice - A library for building interactive command shells

This package provides the runtime of a command shell: a quote-aware
statement tokenizer, regular-expression aliases, per-type value stores with
a current pointer, a registry of pluggable commands, and a structured JSON
execution log. Applications plug in their own store types and commands and
get batch, script and interactive modes for free.
"""

__version__ = "0.1.0"

from .store import Store

from .store_api import (
    StoreType,
    IOHandler,
)

from .environment import Environment

from .command import (
    Command,
    CommandState,
    OptionParser,
    any_true,
    exactly_one_true,
)

from .cli import (
    Cli,
    CliConfig,
)

from .logger import (
    Logger,
    LogRecord,
    LogValue,
)

from .errors import (
    AliceError,
    AliasRecursionError,
    CallForHelp,
    DuplicateCommand,
    DuplicateStore,
    OutOfRange,
    ParseFailed,
    Unimplemented,
    UnknownStore,
)

__all__ = [
    # Stores
    "Store",
    "StoreType",
    "IOHandler",

    # Shell
    "Environment",
    "Command",
    "CommandState",
    "OptionParser",
    "any_true",
    "exactly_one_true",
    "Cli",
    "CliConfig",

    # Logging
    "Logger",
    "LogRecord",
    "LogValue",

    # Errors
    "AliceError",
    "AliasRecursionError",
    "CallForHelp",
    "DuplicateCommand",
    "DuplicateStore",
    "OutOfRange",
    "ParseFailed",
    "Unimplemented",
    "UnknownStore",

    # Version info
    "__version__",
]
