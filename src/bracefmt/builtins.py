## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import datetime

from . import verbs
from .library import Library


def get_verb_name(py_name: str) -> str:
    assert py_name.startswith('verb_'), "Verb functions require prefix `verb_` by convention."
    return py_name[5:]


def load_builtins_library() -> Library:
    lib = Library()

    for k in dir(verbs):
        if not k.startswith('verb_'): continue
        lib.add_verb(get_verb_name(k), getattr(verbs, k))

    # datetime is a subclass of date, both resolve to the same formatter.
    for type_ in (datetime.date, datetime.time):
        lib.add_formatter(type_, verbs.format_temporal)
    return lib
