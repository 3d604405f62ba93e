## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys

from .types import FormatSpec, Ref
from .errors import *
from .runtime import Runtime, RenderConfig
from .validating import validate

_RUNTIME = Runtime()

def __getattr__(name):
    return getattr(_RUNTIME, name)


def p(fmt: str, /, *args, **kwargs) -> int:
    return _RUNTIME.print_render(sys.stdout, fmt, *args, **kwargs)

def pln(fmt: str, /, *args, **kwargs) -> int:
    return _RUNTIME.println_render(sys.stdout, fmt, *args, **kwargs)
