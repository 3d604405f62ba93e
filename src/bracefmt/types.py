## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import enum
import weakref
import dataclasses
from typing import Any, Literal
from numbers import Real
from collections.abc import Mapping, Set
from dataclasses import dataclass, field


Alignment = Literal['<', '>', '^']
SignMode = Literal['+', '-', ' ']
ReferenceKind = Literal['auto', 'index', 'name']


@dataclass(frozen=True)
class FormatSpec:
    fill: str | None = None          # Explicit fill character, None when not given.
    align: Alignment | None = None
    sign: SignMode | None = None
    alternate: bool = False
    zero_pad: bool = False
    width: int | None = None
    precision: int | None = None
    type: str = ''                   # Single-letter tag or a registered verb name.

    @property
    def fill_char(self) -> str:
        if self.fill is not None: return self.fill
        return '0' if self.zero_pad else ' '

    @property
    def alignment(self) -> Alignment:
        # Right is the universal default whenever a width is given without alignment.
        return self.align or '>'


DEFAULT_SPEC = FormatSpec()


@dataclass(frozen=True)
class Reference:
    kind: ReferenceKind
    index: int | None = None
    name: str | None = None

    def __repr__(self):
        match self.kind:
            case 'auto': return "Reference(auto)"
            case 'index': return f"Reference({self.index})"
            case _: return f"Reference({self.name!r})"


AUTO = Reference('auto')


@dataclass(frozen=True)
class Condition:
    predicate: str                   # e.g. `empty`, `nonzero`, or an operator like `>=`.
    operand: str | None              # Comparison literal, None for keyword predicates.
    when_true: str
    when_false: str


@dataclass(frozen=True)
class Placeholder:
    raw: str
    reference: Reference = AUTO
    fields: tuple[str, ...] = ()
    spec: FormatSpec = DEFAULT_SPEC
    color: str | None = None
    condition: Condition | None = None


@dataclass(frozen=True)
class ParsedFormat:
    """Literal segments interleaved with placeholders; always one more segment than placeholders."""
    segments: tuple[str, ...]
    placeholders: tuple[Placeholder, ...] = ()

    def __post_init__(self):
        assert len(self.segments) == len(self.placeholders) + 1


# Resolution failures ─────────────────────────────────────────────────────────────────────────
NO_VALUE = "no value"
INVALID_FIELD = "invalid field"


@dataclass(frozen=True)
class Unresolvable:
    reason: str = NO_VALUE

    def __str__(self):
        return f"<{self.reason}>"


MISSING = Unresolvable(NO_VALUE)
INVALID = Unresolvable(INVALID_FIELD)


# Indirections ────────────────────────────────────────────────────────────────────────────────
@dataclass
class Ref:
    """Mutable box standing in for a pointer; `Ref(None)` is a nil indirection."""
    target: Any = None

    def deref(self) -> Any:
        return self.target


def is_indirection(value: Any) -> bool:
    return isinstance(value, (Ref, weakref.ReferenceType))

def deref(value: Any) -> Any:
    """Follow indirections until a plain value is reached, None when any of them is empty."""
    while is_indirection(value):
        value = value.deref() if isinstance(value, Ref) else value()
        if value is None: return None
    return value


# Value model ─────────────────────────────────────────────────────────────────────────────────
class ValueKind(enum.Enum):
    STRING = 'string'
    INTEGER = 'integer'
    FLOAT = 'float'
    BOOLEAN = 'boolean'
    SEQUENCE = 'sequence'
    MAPPING = 'mapping'
    RECORD = 'record'
    NIL = 'nil'
    UNRESOLVABLE = 'unresolvable'
    OTHER = 'other'


def is_record(value: Any) -> bool:
    if isinstance(value, type): return False
    return dataclasses.is_dataclass(value) or (isinstance(value, tuple) and hasattr(value, '_fields'))

def kind_of(value: Any) -> ValueKind:
    if isinstance(value, Unresolvable): return ValueKind.UNRESOLVABLE
    if value is None: return ValueKind.NIL
    if isinstance(value, bool): return ValueKind.BOOLEAN
    if isinstance(value, int): return ValueKind.INTEGER
    if isinstance(value, float): return ValueKind.FLOAT
    if isinstance(value, str): return ValueKind.STRING
    if is_record(value): return ValueKind.RECORD
    if isinstance(value, Mapping): return ValueKind.MAPPING
    if isinstance(value, (list, tuple, Set)): return ValueKind.SEQUENCE
    if isinstance(value, Real): return ValueKind.FLOAT
    return ValueKind.OTHER


@dataclass
class AutoCounter:
    """Next positional slot consumed by `{}` placeholders during a single render call."""
    position: int = field(default=0)

    def take(self) -> int:
        index, self.position = self.position, self.position + 1
        return index
