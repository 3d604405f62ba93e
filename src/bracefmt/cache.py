## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import logging
import threading
from typing import Callable
from collections import OrderedDict

from .types import ParsedFormat
from .parser import parse


log = logging.getLogger(__name__)


class ParseCache:
    """Bounded memo of parsed format strings, keyed by the exact format text.

    Hits refresh an entry's recency.  Once the entry count exceeds `max_size`, the least
    recently used entries are dropped until only `keep` of the ceiling remains.  Concurrent
    misses on the same format may both parse; the last writer wins.
    """

    def __init__(self, max_size: int = 1000, keep: float = 0.5, parser: Callable[[str], ParsedFormat] = parse):
        assert max_size >= 0 and 0.0 <= keep <= 1.0
        self.max_size = max_size
        self.keep = keep
        self._parse = parser
        self._entries: OrderedDict[str, ParsedFormat] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, format: str) -> ParsedFormat:
        with self._lock:
            if (parsed := self._entries.get(format)) is not None:
                self._entries.move_to_end(format)
                return parsed

        # Parse outside the lock, parsing is pure.
        parsed = self._parse(format)
        if self.max_size == 0: return parsed

        with self._lock:
            self._entries[format] = parsed
            if len(self._entries) > self.max_size:
                self._evict()
        return parsed

    def _evict(self) -> None:
        target = int(self.max_size * self.keep)
        dropped = len(self._entries) - target
        for _ in range(dropped):
            self._entries.popitem(last=False)
        log.debug("Parse cache evicted %d entries, %d remain.", dropped, target)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, format: str) -> bool:
        with self._lock:
            return format in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
