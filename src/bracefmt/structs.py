## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Projection of record-like values (dataclasses, namedtuples, plain objects) into name → value maps.
#

import dataclasses
import functools
from typing import Any
from collections.abc import Mapping

from .types import is_record


TAG = 'fmt'          # Field metadata key renaming a field, `'-'` hides it.
EMBED = 'embed'      # Field metadata key flattening a nested dataclass into its parent.

NOT_FOUND = object()


@functools.cache
def _dataclass_layout(cls: type) -> tuple[tuple[str, str, bool], ...]:
    """Per-type list of `(attribute, exposed_name, embedded)`, hidden fields removed."""
    layout = []
    for f in dataclasses.fields(cls):
        name = f.metadata.get(TAG) or f.name
        if name == '-': continue
        layout.append((f.name, name, bool(f.metadata.get(EMBED))))
    return tuple(layout)


def as_mapping(obj: Any) -> dict[str, Any]:
    """Project a record into a dict of its visible fields, honoring `fmt` / `embed` metadata."""
    if isinstance(obj, Mapping):
        return dict(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        result = {}
        for attr, name, embedded in _dataclass_layout(type(obj)):
            value = getattr(obj, attr)
            if embedded and dataclasses.is_dataclass(value) and not isinstance(value, type):
                result.update(as_mapping(value))
            else:
                result[name] = value
        return result
    if isinstance(obj, tuple) and hasattr(obj, '_asdict'):
        return dict(obj._asdict())
    return _public_attributes(obj)


def _public_attributes(obj: Any) -> dict[str, Any]:
    try:
        names = list(vars(obj))
    except TypeError:
        names = [s for cls in type(obj).__mro__ for s in getattr(cls, '__slots__', ())]
    return {k: getattr(obj, k) for k in names if not k.startswith('_') and hasattr(obj, k)}


def typename(obj: Any) -> str:
    return type(obj).__name__


def lookup_field(obj: Any, name: str) -> Any:
    """Exact, case-sensitive field lookup on a record or plain object; NOT_FOUND when absent.

    A trailing `()` calls the named zero-argument method instead.
    """
    if name.endswith('()'):
        method = _public_attr(obj, name[:-2])
        if method is NOT_FOUND or not callable(method): return NOT_FOUND
        try:
            return method()
        except Exception:
            return NOT_FOUND

    if is_record(obj):
        fields = as_mapping(obj)
        if name in fields: return fields[name]
        # Renamed or hidden dataclass fields are not reachable by their attribute name.
        if dataclasses.is_dataclass(obj) and name in {f.name for f in dataclasses.fields(obj)}:
            return NOT_FOUND
    value = _public_attr(obj, name)
    if value is NOT_FOUND or callable(value): return NOT_FOUND
    return value

def _public_attr(obj: Any, name: str) -> Any:
    if not name or name.startswith('_'): return NOT_FOUND
    try:
        return getattr(obj, name)
    except Exception:
        return NOT_FOUND
