"""Last-value cache deciding which channel writes are worth propagating."""

from __future__ import annotations


class ChangeDetector:
    """Per-key last-propagated value cache.

    Keys are never evicted; growth is bounded by the sensor population.
    """

    def __init__(self) -> None:
        self._last: dict[str, float] = {}

    def should_propagate(self, key: str, value: float) -> bool:
        """Return True (and remember *value*) on first sighting or on change."""
        if key in self._last and self._last[key] == value:
            return False
        self._last[key] = value
        return True

    def record(self, key: str, value: float) -> None:
        """Remember *value* as propagated regardless of the cached one."""
        self._last[key] = value

    def last_value(self, key: str) -> float | None:
        return self._last.get(key)

    def __len__(self) -> int:
        return len(self._last)
