## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import logging
import functools

import lark
from .types import FormatSpec, DEFAULT_SPEC, Reference, AUTO, Condition, Placeholder, ParsedFormat


log = logging.getLogger(__name__)


CONDITION_GRAMMAR = r"""?start: condition
condition: predicate QMARK branch COLON branch
predicate: KEYWORD | OPERATOR OPERAND?
branch: LPAR TEXT? RPAR

// TOKENS
OPERATOR.2: "==" | "!=" | ">=" | "<=" | ">" | "<"
KEYWORD: /!?[A-Za-z_]+/
OPERAND: /[^?\s][^?]*/
TEXT: /[^()]+/
QMARK: "?"
COLON: ":"
LPAR: "("
RPAR: ")"

// WHITESPACE
%import common.WS_INLINE
%ignore WS_INLINE
"""

ALIGNMENTS = '<>^'
SIGNS = '+- '


@functools.cache
def _condition_parser() -> lark.Lark:
    return lark.Lark(CONDITION_GRAMMAR, start='start', parser='lalr', lexer='contextual')


def parse(format: str) -> ParsedFormat:
    """Split `format` into literal segments and placeholders in a single left-to-right scan."""
    segments, placeholders, current = [], [], []
    i, n = 0, len(format)

    while i < n:
        ch = format[i]
        if ch == '{':
            if format.startswith('{{', i):
                current.append('{'); i += 2
                continue
            if (end := format.find('}', i + 1)) == -1:
                # Unclosed placeholder, the remainder is literal text.
                current.append(format[i:])
                break
            segments.append(''.join(current)); current = []
            placeholders.append(parse_placeholder(format[i + 1:end]))
            i = end + 1
        elif ch == '}':
            current.append('}')
            i += 2 if format.startswith('}}', i) else 1
        else:
            # Copy the whole run of plain text at once.
            j = i + 1
            while j < n and format[j] not in '{}': j += 1
            current.append(format[i:j]); i = j

    segments.append(''.join(current))
    return ParsedFormat(segments=tuple(segments), placeholders=tuple(placeholders))


def parse_placeholder(content: str) -> Placeholder:
    """Decompose the text between braces: `reference[:spec][|color][?condition]`."""
    cut = next((k for k, ch in enumerate(content) if ch in ':|?'), len(content))
    reference, fields = parse_reference(content[:cut])
    rest = content[cut:]

    spec, color, condition = DEFAULT_SPEC, None, None
    if rest.startswith(':'):
        end = _spec_end(rest)
        spec, rest = parse_spec(rest[1:end]), rest[end:]
    if rest.startswith('|'):
        end = rest.find('?')
        end = len(rest) if end == -1 else end
        color, rest = rest[1:end].strip() or None, rest[end:]
    if rest.startswith('?'):
        condition = parse_condition(rest[1:])

    return Placeholder(raw='{' + content + '}', reference=reference, fields=fields,
                       spec=spec, color=color, condition=condition)


def _spec_end(rest: str) -> int:
    """Position where the spec after `:` stops: the color bar, or a `?` opening a valid condition.

    A `?` not followed by a well-formed condition stays in the spec as its type tag, e.g. `{:?}`.
    """
    for k in range(1, len(rest)):
        if rest[k] == '|': return k
        if rest[k] == '?' and parse_condition(rest[k + 1:]) is not None: return k
    return len(rest)


def parse_reference(text: str) -> tuple[Reference, tuple[str, ...]]:
    if text == '': return AUTO, ()
    head, dot, tail = text.partition('.')
    fields = tuple(tail.split('.')) if dot else ()
    if head.isascii() and head.isdigit():
        return Reference('index', index=int(head)), fields
    return Reference('name', name=head), fields


def parse_spec(text: str) -> FormatSpec:
    """Best-effort parse of `[[fill]align][sign][#][0][width][.precision][type]`, never fails."""
    fill = align = sign = None
    alternate = zero_pad = False
    width = precision = None

    if len(text) >= 2 and text[1] in ALIGNMENTS:
        fill, align, text = text[0], text[1], text[2:]
    elif text[:1] and text[0] in ALIGNMENTS:
        align, text = text[0], text[1:]

    if text[:1] and text[0] in SIGNS:
        sign, text = text[0], text[1:]
    if text.startswith('#'):
        alternate, text = True, text[1:]
    if text.startswith('0'):
        zero_pad, text = True, text[1:]

    digits, text = _take_digits(text)
    if digits: width = int(digits)
    if text.startswith('.'):
        digits, text = _take_digits(text[1:])
        if digits: precision = int(digits)

    return FormatSpec(fill=fill, align=align, sign=sign, alternate=alternate, zero_pad=zero_pad,
                      width=width, precision=precision, type=text)

def _take_digits(text: str) -> tuple[str, str]:
    k = 0
    while k < len(text) and '0' <= text[k] <= '9': k += 1
    return text[:k], text[k:]


def parse_condition(text: str) -> Condition | None:
    """Parse `predicate?(when true):(when false)`; malformed clauses are dropped."""
    try:
        tree = _condition_parser().parse(text)
    except lark.exceptions.LarkError as exc:
        log.debug("Ignoring malformed condition %r: %s", text, exc)
        return None

    def _is_token(node, type_: str) -> bool: return isinstance(node, lark.Token) and node.type == type_
    def _is_tree(node, data_: str) -> bool: return isinstance(node, lark.Tree) and node.data == data_

    assert _is_tree(tree, 'condition')
    predicate, *rest = tree.children
    branches = [ch for ch in rest if _is_tree(ch, 'branch')]
    assert len(branches) == 2, "Condition requires exactly two branches."

    def _branch_text(node: lark.Tree) -> str:
        return next((ch.value for ch in node.children if _is_token(ch, 'TEXT')), '').strip()

    head = predicate.children[0]
    if _is_token(head, 'OPERATOR'):
        operand = next((ch.value.strip() for ch in predicate.children[1:] if _is_token(ch, 'OPERAND')), '')
        return Condition(predicate=head.value, operand=operand,
                         when_true=_branch_text(branches[0]), when_false=_branch_text(branches[1]))
    return Condition(predicate=head.value, operand=None,
                     when_true=_branch_text(branches[0]), when_false=_branch_text(branches[1]))
