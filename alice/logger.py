#!/usr/bin/env python3
"""
Structured execution log.

The logger writes one JSON object per successful command invocation into a
JSON array on disk. The array is opened when logging starts and closed when
it stops; records are written and flushed as they arrive, so an interrupted
session still leaves every completed record in the file.

Record layout:

    {
      "command": "<raw line>",
      "time": "YYYY-MM-DD HH:MM:SS",
      "<key>": <value>,
      ...
    }

Values are restricted to the kinds in LogValue. The serializer checks each
kind explicitly and rejects anything else with a TypeError.
"""

import math
from datetime import datetime
from typing import Dict, List, Optional, TextIO, Union

Scalar = Union[str, int, float, bool]
LogValue = Union[Scalar, List[str], List[int], List[float], List[bool], List[List[int]]]
LogRecord = Dict[str, LogValue]

TIME_FORMAT = '%Y-%m-%d %H:%M:%S'


def json_escape(text: str) -> str:
    """Escape backslashes, double quotes and control characters."""
    chars = []
    for char in text:
        if char in ('\\', '"'):
            chars.append('\\' + char)
        elif ord(char) < 0x20:
            chars.append(f"\\u{ord(char):04x}")
        else:
            chars.append(char)
    return ''.join(chars)


def format_value(value: LogValue) -> str:
    """Serialize one log value as JSON."""
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return 'true' if value else 'false'
    elif isinstance(value, int):
        return str(value)
    elif isinstance(value, float):
        # JSON has no inf or nan
        return repr(value) if math.isfinite(value) else 'null'
    elif isinstance(value, str):
        return f'"{json_escape(value)}"'
    elif isinstance(value, (list, tuple)):
        return '[' + ', '.join(format_value(element) for element in value) + ']'
    raise TypeError(f"unsupported log value of type {type(value).__name__}: {value!r}")


class Logger:
    """Incremental JSON array writer for command records."""

    def __init__(self):
        self.filename: Optional[str] = None
        self._file: Optional[TextIO] = None
        self._first = True

    @property
    def active(self) -> bool:
        return self._file is not None

    def start(self, filename: str):
        """Open the log file and write the opening bracket."""
        self.filename = filename
        self._file = open(filename, 'w', encoding='utf-8')
        self._first = True
        self._file.write('[')
        self._file.flush()

    def log(self, record: Optional[LogRecord], command: str, start: datetime):
        """
        Append one record.

        command is the raw command line, start the time the command started.
        record may be None or empty, in which case only "command" and "time"
        are written.
        """
        if self._file is None:
            raise RuntimeError("logger has not been started")

        # Serialize first so a bad value does not leave half a record behind
        body = [f'{{\n  "command": "{json_escape(command)}",\n  "time": "{start.strftime(TIME_FORMAT)}"']
        for key, value in (record or {}).items():
            body.append(f',\n  "{json_escape(key)}": {format_value(value)}')
        body.append('\n}')

        if not self._first:
            self._file.write(',\n')
        self._first = False

        self._file.write(''.join(body))
        self._file.flush()

    def stop(self):
        """Write the closing bracket and close the file."""
        if self._file is None:
            return
        self._file.write(']\n')
        self._file.close()
        self._file = None
