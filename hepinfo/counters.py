"""Indexed loop counters.

Counter slots are grouped by the stage that owns them:
  0 - 9   generation driver
  10 - 19 process level
  20 - 39 parton level
  40 - 49 free for user code
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Type, Union


class Counter(IntEnum):
    NEXT_CALLED = 0
    PROCESS_LEVEL_OK = 1
    PARTON_LEVEL_OK = 2
    HADRON_LEVEL_OK = 3
    EVENT_ACCEPTED = 4
    PROCESS_TRIED = 10
    PROCESS_SELECTED = 11
    PARTON_LEVEL_TRIED = 20
    PARTON_LEVEL_VETOED = 21
    USER = 40


CounterIndex = Union[int, Counter]


class CounterBank:
    """Fixed-length bank of integer counters.

    The registry is checked against the bank size at construction, so every
    named slot is guaranteed to be addressable.
    """

    def __init__(self, size: int = 50, registry: Type[IntEnum] = Counter) -> None:
        if size <= 0:
            raise ValueError("size must be > 0")
        too_big = [m.name for m in registry if not 0 <= int(m) < size]
        if too_big:
            raise ValueError(f"Counters {too_big} do not fit in a bank of size {size}")
        self._registry = registry
        self._values = [0] * size

    def _index(self, i: CounterIndex) -> int:
        idx = int(i)
        if not 0 <= idx < len(self._values):
            raise IndexError(f"counter index {idx} out of range [0, {len(self._values)})")
        return idx

    def get(self, i: CounterIndex) -> int:
        return self._values[self._index(i)]

    def set(self, i: CounterIndex, value: int = 0) -> None:
        self._values[self._index(i)] = value

    def add(self, i: CounterIndex, value: int = 1) -> None:
        self._values[self._index(i)] += value

    def reset(self) -> None:
        """Zero every counter. Only called at run/init time."""
        self._values = [0] * len(self._values)

    def as_dict(self) -> Dict[str, int]:
        """Non-zero counters keyed by registry name (or ``counter_<i>``)."""
        names = {int(m): m.name for m in self._registry}
        return {
            names.get(i, f"counter_{i}"): v
            for i, v in enumerate(self._values)
            if v != 0
        }

    def __len__(self) -> int:
        return len(self._values)
