"""Time-bounded memoization of skill results."""

import copy
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300.0


@dataclass(frozen=True)
class CacheEntry:
    result: dict[str, Any]
    stored_at: float


class ResultCache:
    """
    Cache of (skill name, inputs) -> result.

    Entries expire `ttl` seconds after they were stored. Expired entries
    are not evicted; the next `put` for the same key overwrites them.
    The cache never raises: any failure is logged and treated as a miss.
    """

    def __init__(
        self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @staticmethod
    def make_key(skill_name: str, inputs: dict[str, Any]) -> str:
        """Stable serialization of (skill name, inputs)."""
        return json.dumps(
            {"skill": skill_name, "inputs": inputs},
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )

    def get(self, skill_name: str, inputs: dict[str, Any]) -> dict[str, Any] | None:
        """Return a copy of the cached result, or None on miss or expiry."""
        try:
            entry = self._entries.get(self.make_key(skill_name, inputs))
            if entry is None:
                return None
            if self._clock() - entry.stored_at >= self.ttl:
                return None
            return copy.deepcopy(entry.result)
        except Exception as e:
            logger.warning(f"Cache lookup failed for {skill_name}: {e}")
            return None

    def put(
        self, skill_name: str, inputs: dict[str, Any], result: dict[str, Any]
    ) -> None:
        try:
            key = self.make_key(skill_name, inputs)
            self._entries[key] = CacheEntry(copy.deepcopy(result), self._clock())
        except Exception as e:
            logger.warning(f"Cache store failed for {skill_name}: {e}")

    def clear(self) -> None:
        self._entries = {}

    def __len__(self) -> int:
        return len(self._entries)
