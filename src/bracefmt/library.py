## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import logging
import threading
from typing import Any, Callable
from collections import ChainMap
from dataclasses import dataclass, field, replace

from .types import FormatSpec
from .errors import RegistrationError


log = logging.getLogger(__name__)

FormatterFn = Callable[[Any, FormatSpec], str]


@dataclass(frozen=True)
class Verb:
    name: str
    handler: FormatterFn
    doc: str = ""


@dataclass
class Library:
    """Registry of custom type formatters and named verbs, shared by every render call.

    Registration is expected at startup; reads and writes are both guarded by the lock so a
    concurrent registration is never lost nor observed half-applied.
    """
    formatters: dict[type, FormatterFn] = field(default_factory=dict)
    verbs: dict[str, Verb] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    # Registration helpers
    def add_formatter(self, type_: type, fn: FormatterFn) -> None:
        if not isinstance(type_, type):
            raise RegistrationError(f"Formatter key must be a type, got `{type_!r}`.")
        if not callable(fn):
            raise RegistrationError(f"Formatter for `{type_.__name__}` is not callable.")
        with self.lock:
            self.formatters[type_] = fn
        log.debug("Registered formatter for type `%s`.", type_.__name__)

    def add_verb(self, name: str, fn: FormatterFn, doc: str = "") -> None:
        if not isinstance(name, str) or not name:
            raise RegistrationError("Verb name must be a non-empty string.")
        if not callable(fn):
            raise RegistrationError(f"Verb `{name}` is not callable.")
        with self.lock:
            self.verbs[name] = Verb(name=name, handler=fn, doc=doc or (fn.__doc__ or "").strip())
        log.debug("Registered verb `%s`.", name)

    # Lookups
    def get_formatter(self, type_: type) -> FormatterFn | None:
        """Most specific formatter along the type's MRO, if any was registered."""
        with self.lock:
            for cls in type_.__mro__:
                if (fn := self.formatters.get(cls)) is not None:
                    return fn
        return None

    def get_verb(self, name: str) -> Verb | None:
        if not name: return None
        with self.lock:
            return self.verbs.get(name)

    def list_verbs(self) -> dict[str, str]:
        with self.lock:
            return {name: verb.doc for name, verb in self.verbs.items()}

    def with_overlay(self) -> "Library":
        """Create new view sharing all registrations with this one; new ones stay in the overlay."""
        with self.lock:
            return replace(self, formatters=ChainMap({}, self.formatters),
                           verbs=ChainMap({}, self.verbs), lock=threading.RLock())
