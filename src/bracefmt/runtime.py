## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import logging
from typing import Any, Callable, TextIO
from dataclasses import dataclass

from .types import ParsedFormat, AutoCounter
from .errors import FormatError, RenderError, FormattedError
from .cache import ParseCache
from .library import Library, FormatterFn
from .builtins import load_builtins_library
from .resolver import resolve
from .formatting import Renderer
from .validating import validate


log = logging.getLogger(__name__)

_TRUTHY = ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class RenderConfig:
    color: bool = True
    expand_env: bool = False
    cache_size: int = 1000
    cache_keep: float = 0.5

    @classmethod
    def from_env(cls, environ: dict | None = None) -> "RenderConfig":
        env = os.environ if environ is None else environ
        try:
            cache_size = max(0, int(env.get('BRACEFMT_CACHE_SIZE', cls.cache_size)))
        except ValueError:
            cache_size = cls.cache_size
        return cls(color=not env.get('NO_COLOR'),
                   expand_env=env.get('BRACEFMT_EXPAND_ENV', '').strip().lower() in _TRUTHY,
                   cache_size=cache_size)


class Runtime:
    """Rendering facade bundling a parse cache, a formatter library and its configuration."""

    def __init__(self, library: Library | None = None, config: RenderConfig | None = None):
        self.config = config or RenderConfig.from_env()
        self.library = library or load_builtins_library()
        self.cache = ParseCache(self.config.cache_size, self.config.cache_keep)
        self.renderer = Renderer(self.library, color=self.config.color, template=self._render_branch)

    # Rendering ───────────────────────────────────────────────────────────────────────────────
    def render(self, fmt: str, /, *args, **kwargs) -> str:
        """Substitute every placeholder of `fmt`; failures become sentinel text, never errors.

        Only a failing custom formatter or verb raises, as `RenderError`.
        """
        text = self._render(fmt, args, kwargs)
        return os.path.expandvars(text) if self.config.expand_env else text

    f = render

    def safe_render(self, fmt: str, /, *args, **kwargs) -> str:
        try:
            return self.render(fmt, *args, **kwargs)
        except RenderError as exc:
            cause = exc.__cause__ or exc
            log.warning("Rendering %r failed: %s", fmt, exc)
            return f"<render error: {type(cause).__name__}: {cause}>"

    def print_render(self, stream: TextIO, fmt: str, /, *args, **kwargs) -> int:
        return stream.write(self.render(fmt, *args, **kwargs))

    def println_render(self, stream: TextIO, fmt: str, /, *args, **kwargs) -> int:
        return stream.write(self.render(fmt, *args, **kwargs) + '\n')

    def error(self, fmt: str, /, *args, **kwargs) -> FormattedError:
        return FormattedError(self.render(fmt, *args, **kwargs), format=fmt)

    def _render(self, fmt: str, args: tuple, kwargs: dict) -> str:
        if '{' not in fmt and '}' not in fmt:
            return fmt
        parsed = self.cache.get(fmt)
        counter, parts = AutoCounter(), []
        for segment, ph in zip(parsed.segments, parsed.placeholders):
            parts.append(segment)
            value = resolve(ph, args, kwargs, counter)
            try:
                parts.append(self.renderer.render(value, ph.spec, ph.color, ph.condition))
            except RenderError as exc:
                exc.format, exc.placeholder = fmt, ph.raw
                raise
        parts.append(parsed.segments[-1])
        return ''.join(parts)

    def _render_branch(self, literal: str, value: Any) -> str:
        return self._render(literal, (value,), {})

    # Parsing ─────────────────────────────────────────────────────────────────────────────────
    def parse(self, fmt: str) -> ParsedFormat:
        return self.cache.get(fmt)

    def validate(self, fmt: str) -> FormatError | None:
        return validate(fmt)

    def clear_cache(self) -> None:
        self.cache.clear()

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_formatter(self, type_: type, fn: FormatterFn) -> None:
        self.library.add_formatter(type_, fn)

    def register_verb(self, name: str, fn: FormatterFn, doc: str = "") -> None:
        self.library.add_verb(name, fn, doc)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def list_verbs(self) -> dict[str, str]:
        return self.library.list_verbs()

    def get_formatter(self, type_: type) -> Callable | None:
        return self.library.get_formatter(type_)
