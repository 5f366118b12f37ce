#!/usr/bin/env python3
"""
Line reader for the interactive shell.

The dispatch loop only needs two things from the terminal: read one line,
and remember a line in the history. LineReader provides both on top of
the readline module, with optional history persistence and tab completion
of command names.
"""

import readline
from typing import List, Optional

from .environment import Environment


class LineReader:
    """
    Reads command lines from the terminal with readline support.

    If history_file is given, history is loaded from it on creation and
    written back by save_history().
    """

    def __init__(self, env: Environment, history_file: Optional[str] = None,
                 history_size: int = 1000):
        """Initialize reader and configure readline."""
        self.env = env
        self.history_file = history_file
        self.history_size = history_size
        self.history: List[str] = []

        readline.set_history_length(history_size)
        readline.set_completer(self.complete)
        readline.parse_and_bind('tab: complete')
        self._load_history()

    def _load_history(self):
        """Load history from file."""
        if not self.history_file:
            return
        try:
            readline.read_history_file(self.history_file)
            length = readline.get_current_history_length()
            self.history = [
                readline.get_history_item(i)
                for i in range(1, length + 1)
                if readline.get_history_item(i)
            ]
        except OSError:
            # Start with empty history
            self.history = []

    def save_history(self):
        """Save history to file."""
        if not self.history_file:
            return
        try:
            readline.write_history_file(self.history_file)
        except OSError as e:
            self.env.err().write(f"[w] could not save history to {self.history_file}: {e}\n")

    def read_command_line(self, prompt: str) -> Optional[str]:
        """Read one trimmed line, or return None at end of input."""
        try:
            line = input(prompt)
        except EOFError:
            self.env.out().write('\n')
            return None
        return line.strip()

    def add_to_history(self, line: str):
        """Add a line to history, skipping blanks and consecutive duplicates."""
        if not line or not line.strip():
            return
        if self.history and self.history[-1] == line:
            return
        self.history.append(line)
        readline.add_history(line)
        if len(self.history) > self.history_size:
            self.history = self.history[-self.history_size:]

    def complete(self, text: str, state: int) -> Optional[str]:
        """Readline completer for command names."""
        if readline.get_begidx() != 0:
            return None
        matches = sorted(name for name in self.env.commands() if name.startswith(text))
        try:
            return matches[state]
        except IndexError:
            return None
