#!/usr/bin/env python3
"""
Command base class for the alice shell.

A command declares its options in ``__init__``, its preconditions in
``validity_rules``, its work in ``execute`` and, optionally, a record for
the execution log in ``log``. The shell creates each command once and calls
``run`` for every invocation; parsed options never leak from one
invocation to the next.

Example:
    class HelloCommand(Command):
        def __init__(self, env):
            super().__init__(env, "Say hello")
            self.add_option("--name", "who to greet", default="world")

        def execute(self):
            self.env.out().write(f"Hello {self.option_value('name')}\\n")

Option parsing is delegated to argparse. A parser error or ``-h`` never
exits the process; they end the invocation with a message instead.
"""

import argparse
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from .environment import Environment
from .errors import CallForHelp, ParseFailed
from .logger import LogRecord
from .store import Store
from .store_api import StoreType

Rule = Tuple[Callable[[], bool], str]


class CommandState(Enum):
    """Where the last invocation of a command got to."""
    IDLE = 'idle'
    PARSING = 'parsing'
    VALIDATING = 'validating'
    EXECUTING = 'executing'
    DONE = 'done'
    HELP_REQUESTED = 'help_requested'
    PARSE_FAILED = 'parse_failed'
    VALIDITY_FAILED = 'validity_failed'


class _HelpAction(argparse.Action):
    """Help flag that interrupts parsing instead of exiting."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        raise CallForHelp()


class OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing and exiting."""

    def __init__(self, prog: Optional[str] = None, description: Optional[str] = None):
        super().__init__(prog=prog, description=description, add_help=False, allow_abbrev=False)
        self.add_argument('-h', '--help', action=_HelpAction, help='print this help message and exit')

    def error(self, message):
        raise ParseFailed(message)

    def exit(self, status=0, message=None):
        # Only reachable through actions such as 'version'; treat like help
        raise CallForHelp()


def _spellings(name: str) -> List[str]:
    """All names an option can be looked up by: '-s', 's', '--str', 'str'."""
    return [name, name.lstrip('-')]


def any_true(values: Iterable[bool]) -> bool:
    return any(values)


def exactly_one_true(values: Iterable[bool]) -> bool:
    return sum(1 for value in values if value) == 1


class Command:
    """Base class for all shell commands."""

    def __init__(self, env: Environment, caption: str):
        self.env = env
        self.caption = caption
        self.opts = OptionParser(description=caption)
        self.state = CommandState.IDLE

        self._parsed = argparse.Namespace()
        self._dests = {}
        self._defaults = {}
        self._store_flags: List[StoreType] = []

    # Option declaration

    def add_flag(self, names: str, description: str = ''):
        """Add a boolean flag, e.g. ``add_flag("-s,--show", "show contents")``."""
        action = self.opts.add_argument(*names.split(','), action='store_true', help=description)
        self._index(names, action.dest)
        return action

    def add_option(self, names: str, description: str = '', type: Callable = str,
                   default: Any = None, required: bool = False):
        """
        Add an option taking a value.

        A name without leading dashes declares a positional argument, which
        is required unless required=False. The default is returned by
        option_value() but does not make is_set() true.
        """
        flags = names.split(',')
        if flags[0].startswith('-'):
            action = self.opts.add_argument(*flags, type=type, required=required, help=description)
        else:
            action = self.opts.add_argument(flags[0], type=type, nargs=None if required else '?',
                                            help=description)
        self._index(names, action.dest)
        self._defaults[action.dest] = default
        return action

    def add_store_flags(self, store_types: Sequence[StoreType]):
        """
        Add one selection flag per store type, using its mnemonic and plural name.

        Call this after declaring the command's own options: a store whose
        short flag is already taken only gets the long form.
        """
        for store_type in store_types:
            names = store_type.flag_names()
            short = names.split(',')[0]
            if short in self._dests or short == '-h':
                names = f"--{store_type.option}"
            self.add_flag(names, store_type.name_plural)
            self._store_flags.append(store_type)

    def _index(self, names: str, dest: str):
        for name in names.split(','):
            for spelling in _spellings(name):
                self._dests[spelling] = dest

    # Option access

    def is_set(self, name: str) -> bool:
        """Whether a flag was given or an option received a value."""
        dest = self._dests.get(name)
        if dest is None:
            return False
        value = getattr(self._parsed, dest, None)
        return value is not None and value is not False

    def option_value(self, name: str, default: Any = None) -> Any:
        """Value of an option; falls back to its declared default, then to default."""
        dest = self._dests.get(name)
        if dest is None:
            return default
        value = getattr(self._parsed, dest, None)
        if value is None:
            value = self._defaults.get(dest)
        return default if value is None else value

    def selected_stores(self) -> List[StoreType]:
        """Store types whose selection flag was given, in registration order."""
        return [store_type for store_type in self._store_flags if self.is_set(store_type.option)]

    def store(self, store_type) -> Store:
        return self.env.store(store_type)

    # Invocation

    def run(self, args: List[str]) -> bool:
        """
        Run the command with an argument vector whose first entry is its name.

        Returns False if help was requested, parsing failed, or a validity
        rule did not hold; True once execute() has completed.
        """
        self._parsed = argparse.Namespace()

        self.state = CommandState.PARSING
        try:
            self._parsed = self.opts.parse_args(list(args[1:]))
        except CallForHelp:
            self.state = CommandState.HELP_REQUESTED
            self.env.out().write(self.opts.format_help())
            return False
        except ParseFailed as e:
            self.state = CommandState.PARSE_FAILED
            self.env.err().write(f"[e] {e}\n")
            return False

        self.state = CommandState.VALIDATING
        for predicate, reason in self.validity_rules():
            if not predicate():
                self.state = CommandState.VALIDITY_FAILED
                self.env.err().write(f"[e] {reason}\n")
                return False

        self.state = CommandState.EXECUTING
        self.execute()
        self.state = CommandState.DONE
        return True

    def validity_rules(self) -> List[Rule]:
        """Preconditions checked in order after parsing: (predicate, reason) pairs."""
        return []

    def execute(self):
        raise NotImplementedError(f"{type(self).__name__} must implement execute()")

    def log(self) -> Optional[LogRecord]:
        """Record for the execution log of the last successful invocation."""
        return None
