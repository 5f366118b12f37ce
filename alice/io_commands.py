#!/usr/bin/env python3
"""
Built-in commands that move values in and out of stores.

    read_<tag>   read a file into a store
    write_<tag>  write the current value of a store into a file
    convert      convert the current value of one store into another store

Read and write commands are created per file format ("tag") by the shell
builder; they only offer flags for the store types that have a reader or
writer for that tag. Store types hook format-specific options into these
commands through the setup routine of their IOHandler.
"""

import os
from typing import List, Optional, Tuple

from .command import Command, Rule, exactly_one_true
from .environment import Environment
from .logger import LogRecord
from .store_api import StoreType


class _FileCommand(Command):
    """Shared behaviour of read and write commands."""

    def __init__(self, env: Environment, caption: str, tag: str, store_types: List[StoreType]):
        super().__init__(env, caption)
        self.tag = tag
        self.store_types = store_types

        self.add_option('filename', "name of the file", required=True)

    def target(self) -> Optional[StoreType]:
        """The selected store type; implicit if only one type supports the format."""
        selected = self.selected_stores()
        if len(selected) == 1:
            return selected[0]
        if not selected and len(self.store_types) == 1:
            return self.store_types[0]
        return None

    def validity_rules(self) -> List[Rule]:
        return [
            (lambda: bool(self.store_types), f"no store supports the {self.tag} format"),
            (lambda: self.target() is not None, "exactly one store needs to be specified"),
        ]

    def log(self) -> Optional[LogRecord]:
        return {'filename': self.option_value('filename')}


class ReadCommand(_FileCommand):
    """Read a file of one format into a store."""

    def __init__(self, env: Environment, tag: str, label: str):
        store_types = [store_type for store_type in env.store_types() if store_type.can_read(tag)]
        super().__init__(env, f"Read {label} file", tag, store_types)
        self.add_flag('-n,--new', "create new store entry")
        self.add_store_flags(store_types)

        for store_type in store_types:
            setup = store_type.readers[tag].setup
            if setup is not None:
                setup(self)

    def validity_rules(self) -> List[Rule]:
        return super().validity_rules() + [
            (lambda: os.path.isfile(self.option_value('filename')),
             f"file {self.option_value('filename')} does not exist"),
        ]

    def execute(self):
        store_type = self.target()
        store = self.store(store_type)

        value = store_type.read(self.tag, self.option_value('filename'), self)

        if store.is_empty() or self.is_set('new'):
            store.append(value)
        else:
            store.set_current(value)


class WriteCommand(_FileCommand):
    """Write the current value of a store into a file of one format."""

    def __init__(self, env: Environment, tag: str, label: str):
        store_types = [store_type for store_type in env.store_types() if store_type.can_write(tag)]
        super().__init__(env, f"Write {label} file", tag, store_types)
        self.add_store_flags(store_types)

        for store_type in store_types:
            setup = store_type.writers[tag].setup
            if setup is not None:
                setup(self)

    def execute(self):
        store_type = self.target()
        store = self.store(store_type)

        if store.current_index() == -1:
            self.env.out().write(f"[w] no {store_type.name} in store\n")
            return

        store_type.write(self.tag, store.current(), self.option_value('filename'), self)


class ConvertCommand(Command):
    """Convert the current value of one store into a new value of another."""

    def __init__(self, env: Environment):
        super().__init__(env, "Converts data structures")
        self.conversions: List[Tuple[str, StoreType, StoreType]] = []

        for source in env.store_types():
            for dest in env.store_types():
                if source.key != dest.key and source.can_convert(dest):
                    option = f"{source.option}_to_{dest.option}"
                    self.add_flag(f"--{option}", f"convert {source.name} into {dest.name}")
                    self.conversions.append((option, source, dest))

    def selected_conversions(self) -> List[Tuple[str, StoreType, StoreType]]:
        return [conversion for conversion in self.conversions if self.is_set(conversion[0])]

    def validity_rules(self) -> List[Rule]:
        return [
            (lambda: exactly_one_true(self.selected_conversions()),
             "exactly one conversion needs to be specified"),
        ]

    def execute(self):
        _, source, dest = self.selected_conversions()[0]
        store = self.store(source)

        if store.current_index() == -1:
            self.env.out().write(f"[w] no {source.name} in store\n")
            return

        self.store(dest).append(source.convert(dest, store.current()))

    def log(self) -> Optional[LogRecord]:
        _, source, dest = self.selected_conversions()[0]
        return {'source': source.option, 'destination': dest.option}
