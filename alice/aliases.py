#!/usr/bin/env python3
"""
Alias rewriting for the alice shell.

An alias is a rule made of a regular expression and a template. When the
whole input line matches the expression, the line is replaced by the
template with ``{0}``, ``{1}``, ... filled in from the capture groups.
The result is rewritten again, so aliases can expand into other aliases.

    alias "greet (\\w+)" "print Hello {0}"
    greet Bob    ->    print Hello Bob

Rules are tried in the order they were defined; the first full match wins.
A rule that rewrites a line into something it matches again would expand
forever, so the number of rewrites per line is bounded.
"""

import logging
import re
import string
from typing import Mapping, Optional

from .errors import AliasRecursionError
from .tokenizer import trim

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64


def apply_rule(line: str, pattern: str, template: str) -> Optional[str]:
    """Rewrite line with one rule, or return None if it does not match."""
    match = re.fullmatch(pattern, line)
    if match is None:
        return None
    groups = [group if group is not None else '' for group in match.groups()]
    return trim(template.format(*groups))


def rewrite(line: str, aliases: Mapping[str, str],
            max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> str:
    """
    Rewrite a line until no alias matches.

    Raises AliasRecursionError after max_depth rewrites. A max_depth of None
    disables the bound.
    """
    depth = 0
    while True:
        for pattern, template in aliases.items():
            rewritten = apply_rule(line, pattern, template)
            if rewritten is not None:
                break
        else:
            return line

        depth += 1
        if max_depth is not None and depth > max_depth:
            raise AliasRecursionError(line, max_depth)

        logger.debug("alias %r: %r -> %r", pattern, line, rewritten)
        line = rewritten


def validate_rule(pattern: str, template: str) -> Optional[str]:
    """
    Check that a rule can be applied.

    Returns a reason string if the pattern does not compile or the template
    refers to a capture group the pattern does not have, None otherwise.
    """
    try:
        groups = re.compile(pattern).groups
    except re.error as e:
        return f"invalid alias pattern '{pattern}': {e}"

    try:
        fields = [name for _, name, _, _ in string.Formatter().parse(template) if name is not None]
    except ValueError as e:
        return f"invalid alias substitution '{template}': {e}"

    for name in fields:
        if not name.isdigit():
            return f"alias substitution '{template}' may only use positional placeholders like {{0}}"
        if int(name) >= groups:
            return f"alias substitution '{template}' refers to group {name}, but the pattern has {groups} group(s)"

    return None
