#!/usr/bin/env python3
"""
Shell environment.

The environment is the state shared by every command of a shell: the
stores (one per registered store type), the command registry, the command
categories shown by ``help``, the alias rules, the quit and logging flags,
and the output and error sinks.

Commands should print through ``env.out()`` and ``env.err()`` rather than
to sys.stdout directly, so that embeddings and tests can reroute output.
"""

import sys
from types import MappingProxyType
from typing import Dict, List, Mapping, TextIO, Tuple, Union

from .errors import DuplicateCommand, DuplicateStore, UnknownStore
from .logger import Logger
from .store import Store
from .store_api import StoreType

StoreKey = Union[str, StoreType]


def _key(store: StoreKey) -> str:
    return store.key if isinstance(store, StoreType) else store


class Environment:
    """State shared by all commands of one shell."""

    def __init__(self):
        self._store_types: Dict[str, StoreType] = {}
        self._stores: Dict[str, Store] = {}
        self._commands: Dict[str, 'Command'] = {}
        self._categories: Dict[str, List[str]] = {}
        self._aliases: Dict[str, str] = {}

        self.log = False
        self.logger = Logger()
        self._quit = False

        self._out: TextIO = sys.stdout
        self._err: TextIO = sys.stderr

    # Stores

    def register_store(self, store_type: StoreType) -> Store:
        """Create the store for a store type. Keys must be unique."""
        if store_type.key in self._stores:
            raise DuplicateStore(f"store '{store_type.key}' is already registered")
        self._store_types[store_type.key] = store_type
        self._stores[store_type.key] = Store(store_type.name)
        return self._stores[store_type.key]

    def store(self, store: StoreKey) -> Store:
        """Return the store for a store type or its key."""
        key = _key(store)
        if key not in self._stores:
            raise UnknownStore(f"no store '{key}' has been registered")
        return self._stores[key]

    def has_store(self, store: StoreKey) -> bool:
        return _key(store) in self._stores

    def store_type(self, key: str) -> StoreType:
        if key not in self._store_types:
            raise UnknownStore(f"no store '{key}' has been registered")
        return self._store_types[key]

    def store_types(self) -> Tuple[StoreType, ...]:
        """Registered store types in registration order."""
        return tuple(self._store_types.values())

    # Commands

    def register_command(self, name: str, category: str, command: 'Command'):
        """Add a command to the registry and to a help category."""
        if name in self._commands:
            raise DuplicateCommand(f"command '{name}' is already registered")
        self._commands[name] = command
        self._categories.setdefault(category, []).append(name)

    def commands(self) -> Mapping[str, 'Command']:
        return MappingProxyType(self._commands)

    def categories(self) -> Mapping[str, Tuple[str, ...]]:
        """Category names mapped to command names, both in insertion order."""
        return MappingProxyType({name: tuple(names) for name, names in self._categories.items()})

    # Aliases

    def aliases(self) -> Mapping[str, str]:
        return MappingProxyType(self._aliases)

    def add_alias(self, pattern: str, template: str):
        """Add or replace an alias rule. New rules are tried last."""
        self._aliases[pattern] = template

    def remove_alias(self, pattern: str) -> bool:
        """Remove an alias rule. Returns True if it existed."""
        if pattern in self._aliases:
            del self._aliases[pattern]
            return True
        return False

    # Session state

    @property
    def quit(self) -> bool:
        return self._quit

    def request_quit(self):
        self._quit = True

    # Output

    def out(self) -> TextIO:
        return self._out

    def err(self) -> TextIO:
        return self._err

    def reroute(self, out: TextIO, err: TextIO):
        """Send all further output and error messages to new sinks."""
        self._out = out
        self._err = err
