## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Sequence
from collections.abc import Mapping

from .types import Placeholder, AutoCounter, Unresolvable, MISSING, INVALID, ValueKind, kind_of, is_indirection, deref
from .structs import lookup_field, NOT_FOUND


_CONTAINER_KINDS = (ValueKind.RECORD, ValueKind.MAPPING, ValueKind.OTHER)


def resolve(placeholder: Placeholder, args: Sequence[Any], kwargs: Mapping[str, Any] | None = None,
            counter: AutoCounter | None = None) -> Any:
    """Find the value a placeholder refers to, or an `Unresolvable` explaining why there is none.

    Auto references consume `counter`; named references look in `kwargs` when any were given,
    otherwise in the first positional argument if it is a record or mapping.
    """
    ref = placeholder.reference
    match ref.kind:
        case 'auto':
            value = _positional(args, counter.take() if counter is not None else 0)
        case 'index':
            value = _positional(args, ref.index)
        case 'name':
            if (container := named_container(args, kwargs)) is None: return MISSING
            value = lookup(container, ref.name)
        case _:
            raise NotImplementedError(f"Unknown reference kind `{ref.kind}`.")

    return walk(value, placeholder.fields)


def _positional(args: Sequence[Any], index: int) -> Any:
    return args[index] if 0 <= index < len(args) else MISSING


def named_container(args: Sequence[Any], kwargs: Mapping[str, Any] | None) -> Any:
    if kwargs: return kwargs
    if args and kind_of(deref(args[0])) in _CONTAINER_KINDS:
        return args[0]
    return None


def walk(value: Any, fields: Sequence[str]) -> Any:
    """Apply each field name left to right, stopping at the first failure."""
    for name in fields:
        if isinstance(value, Unresolvable): break
        value = lookup(value, name)
    return value


def lookup(value: Any, name: str) -> Any:
    if is_indirection(value) and (value := deref(value)) is None:
        return INVALID

    match kind_of(value):
        case ValueKind.MAPPING:
            try:
                return value[name] if name in value else INVALID
            except TypeError:
                return INVALID
        case ValueKind.RECORD | ValueKind.OTHER:
            found = lookup_field(value, name)
            return INVALID if found is NOT_FOUND else found
        case _:
            return INVALID
