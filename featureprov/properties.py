"""
Properties text parsing for featureprov.

Configuration blocks in a feature descriptor hold their values as
``.properties`` text. This module reads that format:

- ``#`` and ``!`` start a comment line, blank lines are ignored
- keys end at the first unescaped ``=``, ``:`` or whitespace
- a line ending in an odd number of backslashes continues on the next line
- ``\\t \\n \\r \\f`` and ``\\uXXXX`` escapes are decoded, any other escaped
  character stands for itself

A malformed ``\\u`` escape raises PropertiesParseError.
"""

import re
from typing import Dict, Iterator, Tuple

from .errors import PropertiesParseError

_WHITESPACE = ' \t\f'
_SEPARATORS = '=:'
_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}
_HEX_DIGITS = set('0123456789abcdefABCDEF')


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse properties text into an ordered dict.

    Later definitions of a key override earlier ones.

    Args:
        text: Properties text (may be empty)

    Returns:
        Mapping of keys to values, in first-definition order

    Raises:
        PropertiesParseError: On a malformed unicode escape
    """
    properties: Dict[str, str] = {}
    for line in _logical_lines(text or ''):
        key, value = _split_line(line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def _logical_lines(text: str) -> Iterator[str]:
    """Join continued natural lines, dropping comments and blanks."""
    pending = None
    for raw in re.split(r'\r\n|\r|\n', text):
        line = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in '#!':
                continue
            pending = ''

        trailing = len(line) - len(line.rstrip('\\'))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue

        yield pending + line
        pending = None

    if pending:
        yield pending


def _split_line(line: str) -> Tuple[str, str]:
    """Split a logical line into its raw key and raw value."""
    i = 0
    n = len(line)
    while i < n:
        c = line[i]
        if c == '\\':
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    j = i
    while j < n and line[j] in _WHITESPACE:
        j += 1
    if j < n and line[j] in _SEPARATORS:
        j += 1
        while j < n and line[j] in _WHITESPACE:
            j += 1

    return key, line[j:]


def _unescape(raw: str) -> str:
    out = []
    i = 0
    n = len(raw)
    while i < n:
        c = raw[i]
        i += 1
        if c != '\\':
            out.append(c)
            continue
        if i >= n:
            # Dangling backslash at end of input
            break
        c = raw[i]
        i += 1
        if c == 'u':
            digits = raw[i:i + 4]
            if len(digits) < 4 or not set(digits) <= _HEX_DIGITS:
                raise PropertiesParseError(f"Malformed \\uxxxx encoding in {raw!r}")
            out.append(chr(int(digits, 16)))
            i += 4
        else:
            out.append(_ESCAPES.get(c, c))
    return ''.join(out)
