#!/usr/bin/env python3
"""
General-purpose built-in commands.

Every shell gets these commands in its default category:

    alias    define, list and remove alias rules
    current  show or move the current pointer of a store
    help     list commands
    print    print the current value of stores
    ps       print statistics of the current value of stores
    quit     leave the shell
    store    show or clear stores

The file IO commands and ``convert`` live in io_commands.
"""

from typing import List, Optional

from . import aliases
from .command import Command, Rule, any_true, exactly_one_true
from .environment import Environment
from .logger import LogRecord


class AliasCommand(Command):
    """
    Manage alias rules.

    alias                      list all rules
    alias PATTERN TEMPLATE     add a rule
    alias -u PATTERN           remove a rule
    """

    def __init__(self, env: Environment):
        super().__init__(env, "Creates command aliases")
        self.add_option('pattern', "regular expression matched against the whole line")
        self.add_option('substitution', "replacement; {0}, {1}, ... refer to the pattern's groups")
        self.add_flag('-u,--unset', "remove the alias with the given pattern")

    def validity_rules(self) -> List[Rule]:
        return [
            (lambda: not (self.is_set('unset') and not self.is_set('pattern')),
             "--unset needs the pattern of the alias to remove"),
            (lambda: not (self.is_set('unset') and self.is_set('substitution')),
             "--unset does not take a substitution"),
            (lambda: self.is_set('unset') or self.is_set('pattern') == self.is_set('substitution'),
             "an alias needs both a pattern and a substitution"),
            (lambda: self._rule_error() is None, self._rule_error() or ''),
        ]

    def _rule_error(self) -> Optional[str]:
        if self.is_set('unset') or not self.is_set('substitution'):
            return None
        return aliases.validate_rule(self.option_value('pattern'), self.option_value('substitution'))

    def execute(self):
        pattern = self.option_value('pattern')

        if self.is_set('unset'):
            if not self.env.remove_alias(pattern):
                self.env.out().write(f"[w] no alias '{pattern}'\n")
        elif pattern is not None:
            self.env.add_alias(pattern, self.option_value('substitution'))
        elif not self.env.aliases():
            self.env.out().write("[i] no aliases defined\n")
        else:
            for p, template in self.env.aliases().items():
                self.env.out().write(f"{p} -> {template}\n")

    def log(self) -> Optional[LogRecord]:
        if self.is_set('unset') or not self.is_set('pattern'):
            return None
        return {
            'alias': self.option_value('pattern'),
            'substitution': self.option_value('substitution'),
        }


class StoreCommand(Command):
    """Show or clear the contents of stores."""

    def __init__(self, env: Environment):
        super().__init__(env, "Store management")
        self.add_flag('--show', "show contents")
        self.add_flag('--clear', "clear contents")
        self.add_store_flags(env.store_types())

    def validity_rules(self) -> List[Rule]:
        return [
            (lambda: int(self.is_set('show')) + int(self.is_set('clear')) <= 1,
             "only one operation can be specified"),
            (lambda: any_true(self.selected_stores()), "no store has been specified"),
        ]

    def execute(self):
        for store_type in self.selected_stores():
            store = self.store(store_type)
            if self.is_set('clear'):
                store.clear()
                continue

            if store.is_empty():
                self.env.out().write(f"[i] no {store_type.name_plural} in store\n")
                continue

            self.env.out().write(f"[i] {store_type.name_plural} in store:\n")
            for index, element in enumerate(store):
                marker = '*' if store.current_index() == index else ' '
                self.env.out().write(f"  {marker} {index:2}: {store_type.to_string(element)}\n")

    def log(self) -> Optional[LogRecord]:
        return {store_type.option: self.store(store_type).current_index()
                for store_type in self.selected_stores()}


class CurrentCommand(Command):
    """Show or change which value of a store is current."""

    def __init__(self, env: Environment):
        super().__init__(env, "Switches current data structure")
        self.add_option('-i,--index', "new index of the current value", type=int)
        self.add_store_flags(env.store_types())

    def validity_rules(self) -> List[Rule]:
        return [
            (lambda: exactly_one_true(self.selected_stores()), "exactly one store needs to be specified"),
        ]

    def execute(self):
        store_type = self.selected_stores()[0]
        store = self.store(store_type)

        if not self.is_set('index'):
            self.env.out().write(f"[i] current {store_type.name} index: {store.current_index()}\n")
            return

        index = self.option_value('index')
        if not 0 <= index < len(store):
            self.env.out().write(f"[w] index {index} is out of range for {store_type.name_plural}\n")
            return
        store.set_current_index(index)

    def log(self) -> Optional[LogRecord]:
        store_type = self.selected_stores()[0]
        return {'store': store_type.option, 'index': self.store(store_type).current_index()}


class PrintCommand(Command):
    """Print the current value of the selected stores."""

    def __init__(self, env: Environment):
        super().__init__(env, "Prints current data structure")
        self.add_store_flags(env.store_types())

    def validity_rules(self) -> List[Rule]:
        return [(lambda: any_true(self.selected_stores()), "no store has been specified")]

    def execute(self):
        for store_type in self.selected_stores():
            store = self.store(store_type)
            if store.current_index() == -1:
                self.env.out().write(f"[w] no {store_type.name} in store\n")
            else:
                store_type.print(self.env.out(), store.current())


class PsCommand(Command):
    """Print statistics of the current value of the selected stores."""

    def __init__(self, env: Environment):
        super().__init__(env, "Print statistics")
        self.add_flag('--silent', "produce no output")
        self.add_store_flags(env.store_types())

    def validity_rules(self) -> List[Rule]:
        return [(lambda: any_true(self.selected_stores()), "no store has been specified")]

    def execute(self):
        if self.is_set('silent'):
            return

        for store_type in self.selected_stores():
            store = self.store(store_type)
            if store.current_index() == -1:
                self.env.out().write(f"[w] no {store_type.name} in store\n")
            else:
                store_type.print_statistics(self.env.out(), store.current())

    def log(self) -> Optional[LogRecord]:
        # Statistics of the first selected store that has any
        for store_type in self.selected_stores():
            store = self.store(store_type)
            if store.current_index() == -1:
                continue
            record = store_type.log_statistics(store.current())
            if record:
                return record
        return None


class HelpCommand(Command):
    """List available commands by category."""

    COLUMNS = 4
    COLUMN_WIDTH = 18

    def __init__(self, env: Environment):
        super().__init__(env, "Shows help")
        self.add_flag('-d,--detailed', "print command descriptions")
        self.add_option('-s,--search', "search for commands whose name or description contains the text")

    def execute(self):
        out = self.env.out()
        commands = self.env.commands()

        if self.is_set('search'):
            text = self.option_value('search')
            found = False
            for names in self.env.categories().values():
                for name in names:
                    if text in name or text in commands[name].caption:
                        out.write(f" {name:<{self.COLUMN_WIDTH - 1}}{commands[name].caption}\n")
                        found = True
            if not found:
                out.write(f"[i] no commands match '{text}'\n")
            return

        for category, names in self.env.categories().items():
            out.write(f"{category} commands:\n")
            if self.is_set('detailed'):
                for name in names:
                    out.write(f" {name:<{self.COLUMN_WIDTH - 1}}{commands[name].caption}\n")
            else:
                for start in range(0, len(names), self.COLUMNS):
                    row = names[start:start + self.COLUMNS]
                    out.write(' ' + ''.join(f"{name:<{self.COLUMN_WIDTH}}" for name in row).rstrip() + '\n')
            out.write('\n')


class QuitCommand(Command):
    """Leave the shell."""

    def __init__(self, env: Environment):
        super().__init__(env, "Quits the shell")

    def execute(self):
        self.env.request_quit()
