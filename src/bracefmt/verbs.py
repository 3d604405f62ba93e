## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import json
import datetime
import dataclasses
from typing import Any

from .types import FormatSpec, deref
from .structs import as_mapping


## VERBS
def verb_json(x: Any, spec: FormatSpec) -> str:
    """Format as compact JSON; records become objects."""
    def _default(o):
        if (target := deref(o)) is not o: return target
        if dataclasses.is_dataclass(o) or hasattr(o, '_asdict'): return as_mapping(o)
        if isinstance(o, (set, frozenset)): return list(o)
        if isinstance(o, (datetime.date, datetime.time)): return o.isoformat()
        raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")
    try:
        return json.dumps(x, default=_default, ensure_ascii=False)
    except (TypeError, ValueError):
        return "<invalid json>"

def verb_upper(x: Any, spec: FormatSpec) -> str:
    """Convert to uppercase."""
    return str(x).upper()

def verb_lower(x: Any, spec: FormatSpec) -> str:
    """Convert to lowercase."""
    return str(x).lower()

def verb_title(x: Any, spec: FormatSpec) -> str:
    """Capitalize each word."""
    return str(x).title()

def verb_hex(x: Any, spec: FormatSpec) -> str:
    """Format integers, text and bytes as hexadecimal."""
    if isinstance(x, int) and not isinstance(x, bool): return format(x, 'x')
    if isinstance(x, str): return x.encode('utf-8').hex()
    if isinstance(x, (bytes, bytearray)): return x.hex()
    return str(x)

def verb_bin(x: Any, spec: FormatSpec) -> str:
    """Format integers as binary."""
    if isinstance(x, int) and not isinstance(x, bool): return format(x, 'b')
    return str(x)


## TYPE FORMATTERS
TIME_LAYOUTS = {'date': '%Y-%m-%d', 'time': '%H:%M:%S'}

def format_temporal(x: datetime.date | datetime.time, spec: FormatSpec) -> str:
    if not spec.type: return x.isoformat()
    return x.strftime(TIME_LAYOUTS.get(spec.type, spec.type))
