#!/usr/bin/env python3
"""
Store type descriptions.

A StoreType bundles the static metadata of one data type (key, option name,
mnemonic, display names) with the routines the built-in commands call on
its values: one-line description, printing, statistics, file IO and
conversion to other store types.

Every routine has a harmless default, so a store type only provides what
it supports. File IO and conversion are opt-in: a reader, writer or
converter that was not provided raises Unimplemented when used.

Example:
    strings = StoreType(
        key='string', option='str', mnemonic='s',
        name='string', name_plural='strings',
        to_string=lambda s: f"{len(s)} characters",
    )
    strings.add_reader('text', lambda filename, cmd: open(filename).read())
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TextIO

from .errors import Unimplemented
from .logger import LogRecord


def _no_description(element: Any) -> str:
    return ''


def _print_newline(out: TextIO, element: Any):
    out.write('\n')


def _no_statistics(element: Any) -> Optional[LogRecord]:
    return None


@dataclass
class IOHandler:
    """
    A file-format capability of a store type.

    func is the read routine ``(filename, command) -> value`` or the write
    routine ``(value, filename, command) -> None``. setup, if given, is
    called once with the read or write command when it is created, e.g. to
    add format-specific options.
    """
    func: Callable
    setup: Optional[Callable[[Any], None]] = None


@dataclass
class StoreType:
    """Metadata and per-value routines for one store type."""
    key: str
    option: str
    mnemonic: str
    name: str
    name_plural: str
    to_string: Callable[[Any], str] = _no_description
    print: Callable[[TextIO, Any], None] = _print_newline
    print_statistics: Callable[[TextIO, Any], None] = _print_newline
    log_statistics: Callable[[Any], Optional[LogRecord]] = _no_statistics
    readers: Dict[str, IOHandler] = field(default_factory=dict)
    writers: Dict[str, IOHandler] = field(default_factory=dict)
    converters: Dict[str, Callable[[Any], Any]] = field(default_factory=dict)

    def flag_names(self) -> str:
        """Command-line spelling of this store's selection flag."""
        if len(self.mnemonic) == 1:
            return f"-{self.mnemonic},--{self.option}"
        return f"--{self.option}"

    def add_reader(self, tag: str, func: Callable, setup: Optional[Callable] = None):
        self.readers[tag] = IOHandler(func, setup)

    def add_writer(self, tag: str, func: Callable, setup: Optional[Callable] = None):
        self.writers[tag] = IOHandler(func, setup)

    def add_converter(self, dest: 'StoreType', func: Callable[[Any], Any]):
        self.converters[dest.key] = func

    def can_read(self, tag: str) -> bool:
        return tag in self.readers

    def can_write(self, tag: str) -> bool:
        return tag in self.writers

    def can_convert(self, dest: 'StoreType') -> bool:
        return dest.key in self.converters

    def read(self, tag: str, filename: str, command) -> Any:
        """Read a value from a file in the given format."""
        if tag not in self.readers:
            raise Unimplemented(f"{self.name} cannot be read from {tag}")
        return self.readers[tag].func(filename, command)

    def write(self, tag: str, element: Any, filename: str, command):
        """Write a value to a file in the given format."""
        if tag not in self.writers:
            raise Unimplemented(f"{self.name} cannot be written to {tag}")
        self.writers[tag].func(element, filename, command)

    def convert(self, dest: 'StoreType', element: Any) -> Any:
        """Convert a value of this type into a value of dest."""
        if dest.key not in self.converters:
            raise Unimplemented(f"{self.name} cannot be converted to {dest.name}")
        return self.converters[dest.key](element)
