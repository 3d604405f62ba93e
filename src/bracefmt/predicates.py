## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Predicates evaluated by `?condition?(a):(b)` clauses against the raw resolved value.
#

import operator
from typing import Any, Callable
from collections.abc import Sized

from .types import Condition, Unresolvable, deref, is_record


def _plain(x: Any) -> Any:
    return None if isinstance(x, Unresolvable) else deref(x)

def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)

## KEYWORDS
def is_empty(x: Any) -> bool:
    x = _plain(x)
    if x is None: return True
    if _is_number(x): return x == 0
    if is_record(x): return False
    return len(x) == 0 if isinstance(x, Sized) else False

def is_zero(x: Any) -> bool: return _is_number(x := _plain(x)) and x == 0
def is_nonzero(x: Any) -> bool: return _is_number(x := _plain(x)) and x != 0
def is_truthy(x: Any) -> bool:
    x = _plain(x)
    if x is None: return False
    try:
        return bool(x)
    except Exception:
        return True

KEYWORDS: dict[str, Callable[[Any], bool]] = {
    'empty': is_empty,
    'nonempty': lambda x: not is_empty(x),
    '!empty': lambda x: not is_empty(x),
    'zero': is_zero,
    'nonzero': is_nonzero,
    'true': is_truthy,
    'false': lambda x: not is_truthy(x),
}

## COMPARISONS
OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    '==': operator.eq, '!=': operator.ne,
    '>=': operator.ge, '<=': operator.le,
    '>': operator.gt, '<': operator.lt,
}

def compare(x: Any, op: str, literal: str) -> bool:
    """Compare against a literal: numbers numerically, strings lexically, booleans by equality."""
    x, fn = _plain(x), OPERATORS.get(op)
    if fn is None or not literal: return False
    if isinstance(x, bool):
        if op not in ('==', '!=') or literal.lower() not in ('true', 'false'): return False
        return fn(x, literal.lower() == 'true')
    if _is_number(x):
        try:
            return fn(x, float(literal))
        except ValueError:
            return False
    if isinstance(x, str):
        return fn(x, literal)
    return False


def evaluate(condition: Condition, value: Any) -> bool:
    if condition.operand is not None:
        return compare(value, condition.predicate, condition.operand)
    if (check := KEYWORDS.get(condition.predicate.lower())) is None:
        return False
    return check(value)
