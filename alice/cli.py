#!/usr/bin/env python3
"""
Command-line driver for alice shells.

This module assembles a shell from store types and commands and runs it.
Input comes from a semicolon-separated batch string (-c), a file (-f), or
the terminal; every line goes through the same steps:

    raw line -> statement split -> alias rewrite -> argument split
             -> command lookup -> Command.run -> execution log

Besides commands, a line can be a comment (``# ...``), a shell escape
(``!ls -l``) or a file inclusion (``< script.txt``).

Example:
    cli = Cli("demo", stores=[strings])
    cli.set_category("I/O")
    cli.insert_read_command("read_text", "text", "Text")
    sys.exit(cli.run())
"""

import logging
import subprocess
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from .aliases import DEFAULT_MAX_DEPTH, rewrite
from .command import Command, OptionParser
from .commands import (
    AliasCommand, CurrentCommand, HelpCommand, PrintCommand,
    PsCommand, QuitCommand, StoreCommand
)
from .environment import Environment
from .errors import AliasRecursionError, CallForHelp, ParseFailed
from .io_commands import ConvertCommand, ReadCommand, WriteCommand
from .line_reader import LineReader
from .store_api import StoreType
from .tokenizer import split_arguments, split_statements, trim

logger = logging.getLogger(__name__)


@dataclass
class CliConfig:
    """Configuration for a shell."""
    default_category: str = 'General'
    max_alias_depth: Optional[int] = DEFAULT_MAX_DEPTH
    history_file: Optional[str] = None
    history_size: int = 1000


class Cli:
    """
    A shell built from store types and commands.

    The shell is single-threaded: each statement runs to completion before
    the next one is read. Code that calls into a shell from several threads
    must serialize those calls itself.
    """

    def __init__(self, prefix: str, stores: Sequence[StoreType] = (),
                 config: Optional[CliConfig] = None,
                 line_reader: Optional[LineReader] = None):
        """Create the environment, its stores and the general commands."""
        self.prefix = prefix
        self.config = config or CliConfig()
        self.env = Environment()
        self.line_reader = line_reader
        self.counter = 1

        for store_type in stores:
            self.env.register_store(store_type)

        self.set_category(self.config.default_category)
        self.insert_command('alias', AliasCommand(self.env))
        self.insert_command('convert', ConvertCommand(self.env))
        self.insert_command('current', CurrentCommand(self.env))
        self.insert_command('help', HelpCommand(self.env))
        self.insert_command('print', PrintCommand(self.env))
        self.insert_command('ps', PsCommand(self.env))
        self.insert_command('quit', QuitCommand(self.env))
        self.insert_command('store', StoreCommand(self.env))

        self.opts = OptionParser(prog=prefix, description=f"{prefix} shell")
        self.opts.add_argument('-c', '--command', help="process semicolon-separated list of commands")
        self.opts.add_argument('-f', '--flag', dest='file',
                               help="process file with new-line separated list of commands")
        self.opts.add_argument('-e', '--echo', action='store_true',
                               help="echo the command if read from command line or file")
        self.opts.add_argument('-n', '--counter', action='store_true', help="show a counter in the prefix")
        self.opts.add_argument('-i', '--interactive', action='store_true',
                               help="continue in interactive mode after processing commands "
                                    "(in command or file mode)")
        self.opts.add_argument('-l', '--log', help="logs the execution and stores many statistical information")
        self.options = self.opts.parse_args([])

    # Registration

    def set_category(self, category: str):
        """Category for commands inserted from now on."""
        self.category = category

    def insert_command(self, name: str, command: Command):
        command.opts.prog = name
        self.env.register_command(name, self.category, command)

    def insert_read_command(self, name: str, tag: str, label: str):
        """Add a command reading files of format tag into stores that support it."""
        self.insert_command(name, ReadCommand(self.env, tag, label))

    def insert_write_command(self, name: str, tag: str, label: str):
        """Add a command writing stores that support format tag into files."""
        self.insert_command(name, WriteCommand(self.env, tag, label))

    # Session

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the shell with command-line arguments (sys.argv[1:] by default).

        Returns the process exit code: 0 normally, 1 for help or a failed
        statement in batch mode, 2 for malformed arguments or a log file that
        cannot be opened.
        """
        try:
            self.options = self.opts.parse_args(sys.argv[1:] if argv is None else argv)
        except CallForHelp:
            self.env.out().write(self.opts.format_help())
            return 1
        except ParseFailed as e:
            self.env.err().write(f"[e] {e}\n")
            return 2

        if self.options.log:
            try:
                self.env.logger.start(self.options.log)
            except OSError as e:
                self.env.err().write(f"[e] cannot open log file {self.options.log}: {e.strerror or e}\n")
                return 2
            self.env.log = True

        try:
            return self._run_session()
        finally:
            if self.env.log:
                self.env.logger.stop()

    def _run_session(self) -> int:
        options = self.options

        if options.command is not None:
            for line in split_statements(options.command):
                if options.echo:
                    self.env.out().write(f"{self.get_prefix()}{line}\n")
                if not self.dispatch(line):
                    return 1
                if self.env.quit:
                    break
        elif options.file is not None:
            self.process_file(options.file, options.echo)
            if not options.interactive:
                self.env.request_quit()

        batch = options.command is not None or options.file is not None
        if not batch or (options.interactive and not self.env.quit):
            self.run_interactive()

        return 0

    def run_interactive(self):
        """Read and execute lines from the terminal until end of input or quit."""
        reader = self.line_reader or LineReader(self.env, self.config.history_file,
                                                self.config.history_size)

        while not self.env.quit:
            try:
                line = reader.read_command_line(self.get_prefix())
                if line is None:
                    break
                self.dispatch(line)
                reader.add_to_history(line)
            except KeyboardInterrupt:
                self.env.out().write("^C\n")

        reader.save_history()

    def process_file(self, filename: str, echo: bool = False) -> bool:
        """
        Execute a file line by line.

        Returns True if a line requested to quit. A file that cannot be read
        is reported and treated as empty.
        """
        try:
            with open(filename, encoding='utf-8') as f:
                lines = f.read().splitlines()
        except OSError:
            self.env.err().write(f"[e] file {filename} not found\n")
            return False
        except UnicodeDecodeError:
            self.env.err().write(f"[e] file {filename} is not a UTF-8 text file\n")
            return False

        for line in lines:
            line = trim(line)
            if echo:
                self.env.out().write(f"{self.get_prefix()}{line}\n")
            self.dispatch(line)
            if self.env.quit:
                return True

        return False

    def get_prefix(self) -> str:
        """The prompt, with a running counter if -n was given."""
        if self.options.counter:
            prefix = f"{self.prefix} {self.counter}> "
            self.counter += 1
            return prefix
        return f"{self.prefix}> "

    # Execution

    def preprocess_alias(self, line: str) -> str:
        return rewrite(line, self.env.aliases(), self.config.max_alias_depth)

    def dispatch(self, line: str) -> bool:
        """Rewrite a line through the aliases and execute it."""
        try:
            line = self.preprocess_alias(line)
        except AliasRecursionError as e:
            self.env.err().write(f"[e] {e}\n")
            return False
        return self.execute_line(line)

    def execute_line(self, line: str) -> bool:
        """
        Execute one line, whose aliases have already been rewritten.

        Returns False if the line, or any of its statements, failed.
        """
        line = trim(line)

        if not line or line.startswith('#'):
            return True

        statements = split_statements(line)
        if len(statements) > 1:
            for statement in statements:
                if not self.dispatch(statement):
                    return False
                if self.env.quit:
                    break
            return True

        if line.startswith('!'):
            return self._shell_escape(line)

        if line.startswith('<'):
            self.process_file(trim(line[1:]), self.options.echo)
            return True

        args = split_arguments(line)
        if not args:
            return True

        command = self.env.commands().get(args[0])
        if command is None:
            self.env.err().write(f"[e] unknown command: {args[0]}\n")
            return False

        logger.debug("dispatching %r", args)
        start = datetime.now()
        try:
            result = command.run(args)
            if result and self.env.log:
                self.env.logger.log(command.log(), line, start)
        except Exception as e:
            logger.debug("command %s failed", args[0], exc_info=True)
            self.env.err().write(f"[e] {e}\n")
            return False

        return result

    def _shell_escape(self, line: str) -> bool:
        start = datetime.now()
        logger.debug("shell escape %r", line[1:])
        process = subprocess.run(line[1:], shell=True, stdout=subprocess.PIPE,
                                 stderr=subprocess.STDOUT, text=True)
        output = process.stdout

        self.env.out().write(output)
        if output and not output.endswith('\n'):
            self.env.out().write('%\n')

        if self.env.log:
            self.env.logger.log({'status': process.returncode, 'output': output}, line, start)

        return True
