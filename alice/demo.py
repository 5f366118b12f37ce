#!/usr/bin/env python3
"""
Demo shell with a single store type for strings.

    $ alice-demo -c "read_text README.md; store -s; print -s"

Strings can be read from and written to text files.
"""

import sys

from .cli import Cli
from .store_api import StoreType


def _print_string(out, element: str):
    out.write(element + '\n')


def _print_statistics(out, element: str):
    out.write(f"characters: {len(element)}, lines: {len(element.splitlines())}\n")


def _read_text(filename: str, cmd) -> str:
    with open(filename, encoding='utf-8') as f:
        return f.read()


def _write_text(element: str, filename: str, cmd):
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(element)


def string_store() -> StoreType:
    """Store type for plain strings."""
    strings = StoreType(
        key='string',
        option='str',
        mnemonic='s',
        name='string',
        name_plural='strings',
        to_string=lambda element: f"{len(element)} characters",
        print=_print_string,
        print_statistics=_print_statistics,
        log_statistics=lambda element: {
            'characters': len(element),
            'lines': len(element.splitlines()),
        },
    )
    strings.add_reader('text', _read_text)
    strings.add_writer('text', _write_text)
    return strings


def build_cli() -> Cli:
    cli = Cli('demo', stores=[string_store()])
    cli.set_category('I/O')
    cli.insert_read_command('read_text', 'text', 'Text')
    cli.insert_write_command('write_text', 'text', 'Text')
    return cli


def main():
    """Main entry point for the demo shell."""
    sys.exit(build_cli().run())


if __name__ == '__main__':
    main()
