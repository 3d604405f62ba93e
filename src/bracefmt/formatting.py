## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import decimal
import dataclasses
from typing import Any, Callable
from numbers import Real, Rational

from .types import FormatSpec, DEFAULT_SPEC, Condition, Unresolvable, ValueKind, kind_of, is_indirection, deref
from .errors import RenderError
from .library import Library
from .structs import as_mapping, typename
from .predicates import evaluate


NIL = "<nil>"
CYCLE = "<cycle>"

RESET = "\033[0m"
COLORS = {
    'black': "\033[30m", 'red': "\033[31m", 'green': "\033[32m", 'yellow': "\033[33m",
    'blue': "\033[34m", 'magenta': "\033[35m", 'cyan': "\033[36m", 'white': "\033[37m",
    'bright_black': "\033[90m", 'bright_red': "\033[91m", 'bright_green': "\033[92m",
    'bright_yellow': "\033[93m", 'bright_blue': "\033[94m", 'bright_magenta': "\033[95m",
    'bright_cyan': "\033[96m", 'bright_white': "\033[97m",
    'bold': "\033[1m", 'dim': "\033[2m", 'underline': "\033[4m",
}

BASES = {'b': ('b', '0b'), 'o': ('o', '0o'), 'x': ('x', '0x'), 'X': ('X', '0X')}
FLOAT_TYPES = frozenset('eEfFgG%')
BOOL_WORDS = {'y': ('yes', 'no'), 'Y': ('YES', 'NO'), 't': ('true', 'false'), 'T': ('TRUE', 'FALSE')}


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def pad(text: str, spec: FormatSpec) -> str:
    if spec.width is None or (padding := spec.width - len(text)) <= 0:
        return text
    fill = spec.fill_char
    match spec.alignment:
        case '<': return text + fill * padding
        case '^':
            left = padding // 2
            return fill * left + text + fill * (padding - left)
        case _: return fill * padding + text


def colorize(text: str, color: str | None) -> str:
    if not color or (code := COLORS.get(color.lower())) is None:
        return text
    return code + text + RESET


def _sign_aware(lead: str, body: str, spec: FormatSpec) -> str:
    # Zero padding without an explicit alignment goes between the sign/prefix and the digits.
    if spec.zero_pad and spec.align is None and spec.fill is None and spec.width is not None:
        return lead + body.rjust(spec.width - len(lead), '0')
    return lead + body

def _sign_of(negative: bool, spec: FormatSpec) -> str:
    if negative: return '-'
    return {'+': '+', ' ': ' '}.get(spec.sign, '')


def as_real(value: Real) -> float | decimal.Decimal:
    """Float view of a real number, or an exact Decimal when it does not fit into a float."""
    try:
        return float(value)
    except OverflowError:
        if isinstance(value, Rational):
            return decimal.Decimal(value.numerator) / decimal.Decimal(value.denominator)
        return decimal.Decimal(str(value))


def format_integer(value: int, spec: FormatSpec) -> str:
    if spec.type in FLOAT_TYPES:
        return format_float(as_real(value), spec)
    if spec.type == 'c':
        try:
            return chr(value)
        except (ValueError, OverflowError):
            pass
    code, prefix = BASES.get(spec.type, ('d', ''))
    lead = _sign_of(value < 0, spec) + (prefix if spec.alternate else '')
    return _sign_aware(lead, format(abs(value), code), spec)


def format_float(value: float | decimal.Decimal, spec: FormatSpec) -> str:
    tag, negative = spec.type, value < 0
    if tag not in FLOAT_TYPES and spec.precision is None:
        # Shortest round-tripping form when neither notation nor precision was requested.
        body = str(abs(value))
    else:
        precision = 6 if spec.precision is None else spec.precision
        alt = '#' if spec.alternate else ''
        if tag == '%':
            body = format(abs(value) * 100, f"{alt}.{precision}f") + '%'
        elif tag in FLOAT_TYPES:
            body = format(abs(value), f"{alt}.{precision}{tag}")
        else:
            body = format(abs(value), f"{alt}.{precision}f")
    return _sign_aware(_sign_of(negative, spec), body, spec)


def format_bool(value: bool, spec: FormatSpec) -> str:
    yes, no = BOOL_WORDS.get(spec.type, ('true', 'false'))
    return yes if value else no


def format_string(value: str, spec: FormatSpec) -> str:
    if spec.precision is not None:
        value = value[:spec.precision]
    return value


class Renderer:
    """Turns resolved values into text according to a placeholder's spec, color and condition.

    Custom verbs (selected by the spec's type tag) and custom type formatters from the library
    take priority over the built-in rules.  Branch literals of conditions are passed through
    `template` with the raw value, which lets them hold further placeholders.
    """

    def __init__(self, library: Library, *, color: bool = True,
                 template: Callable[[str, Any], str] | None = None):
        self.library = library
        self.color = color
        self.template = template

    def render(self, value: Any, spec: FormatSpec = DEFAULT_SPEC, color: str | None = None,
               condition: Condition | None = None) -> str:
        if condition is not None:
            literal = condition.when_true if evaluate(condition, value) else condition.when_false
            text = self.template(literal, value) if self.template else literal
        else:
            text = pad(self.format_value(value, spec), spec)
        return colorize(text, color) if self.color else text

    def format_value(self, value: Any, spec: FormatSpec = DEFAULT_SPEC, _seen: frozenset = frozenset()) -> str:
        """Type-directed formatting of a single value, before width and alignment."""
        if isinstance(value, Unresolvable): return str(value)
        if is_indirection(value): value = deref(value)
        if value is None: return NIL

        if (verb := self.library.get_verb(spec.type)) is not None:
            return self._call_custom(verb.handler, value, spec, f"verb `{verb.name}`")
        if (fn := self.library.get_formatter(type(value))) is not None:
            return self._call_custom(fn, value, spec, f"formatter for `{typename(value)}`")
        if spec.type == '?':
            return format_string(repr(value), spec)

        match kind := kind_of(value):
            case ValueKind.BOOLEAN: return format_bool(value, spec)
            case ValueKind.INTEGER: return format_integer(value, spec)
            case ValueKind.FLOAT: return format_float(as_real(value), spec)
            case ValueKind.STRING: return format_string(value, spec)
            case ValueKind.SEQUENCE | ValueKind.MAPPING | ValueKind.RECORD:
                return self._format_composite(value, kind, spec, _seen)
            case _: return format_string(str(value), spec)

    def _format_composite(self, value: Any, kind: ValueKind, spec: FormatSpec, seen: frozenset) -> str:
        if id(value) in seen: return CYCLE
        seen = seen | {id(value)}
        # Width and alignment belong to the composite as a whole, not to its items.
        inner = dataclasses.replace(spec, width=None, align=None, fill=None, zero_pad=False)
        item = lambda v: self.format_value(v, inner, seen)

        match kind:
            case ValueKind.SEQUENCE:
                return '[' + ', '.join(item(v) for v in value) + ']'
            case ValueKind.MAPPING:
                return '{' + ', '.join(f"{self.format_value(k, DEFAULT_SPEC, seen)}: {item(v)}"
                                       for k, v in value.items()) + '}'
            case _:
                fields = as_mapping(value)
                return typename(value) + '{' + ', '.join(f"{k}: {item(v)}" for k, v in fields.items()) + '}'

    def _call_custom(self, fn: Callable, value: Any, spec: FormatSpec, what: str) -> str:
        try:
            return str(fn(value, spec))
        except Exception as exc:
            raise RenderError(f"{what} failed with {type(exc).__name__}: {exc}") from exc
