## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# bracefmt — Optional pre-flight check of brace balance, never invoked by rendering itself.
#

from .errors import FormatError, UnexpectedClosingBrace, UnclosedBrace


def validate(format: str) -> FormatError | None:
    """Return the first brace problem in `format`, or None when every brace is balanced.

    Doubled braces outside a placeholder are escapes.  Inside a placeholder the first `}`
    closes it, the same way the parser reads it.
    """
    opened, i, n = None, 0, len(format)
    while i < n:
        ch = format[i]
        if opened is None:
            if format.startswith('{{', i) or format.startswith('}}', i):
                i += 2
                continue
            if ch == '{':
                opened = i
            elif ch == '}':
                return UnexpectedClosingBrace("unexpected closing brace", format=format, position=i)
        elif ch == '}':
            opened = None
        i += 1

    if opened is not None:
        return UnclosedBrace("unclosed brace", format=format, position=opened)
    return None
