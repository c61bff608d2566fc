from __future__ import annotations

from typing import Dict, List

from .models import CrossSectionSnapshot

_EMPTY = CrossSectionSnapshot()


class CrossSectionAccumulator:
    """Latest cross-section snapshot, for the whole run and per process code.

    Code 0 holds the run total. How the running estimate is derived across
    trials belongs to the process producer; this class only stores the most
    recent values it was given.
    """

    def __init__(self) -> None:
        self._snapshots: Dict[int, CrossSectionSnapshot] = {}

    def update(
        self,
        n_tried: int,
        n_selected: int,
        n_accepted: int,
        sigma_gen: float,
        sigma_err: float,
        weight_sum: float,
        code: int = 0,
    ) -> None:
        """Replace the snapshot for ``code`` with all six values at once."""
        self._snapshots[code] = CrossSectionSnapshot(
            n_tried=n_tried,
            n_selected=n_selected,
            n_accepted=n_accepted,
            sigma_gen=sigma_gen,
            sigma_err=sigma_err,
            weight_sum=weight_sum,
        )

    def snapshot(self, code: int = 0) -> CrossSectionSnapshot:
        return self._snapshots.get(code, _EMPTY)

    def codes(self) -> List[int]:
        return sorted(self._snapshots)

    def n_tried(self, code: int = 0) -> int:
        return self.snapshot(code).n_tried

    def n_selected(self, code: int = 0) -> int:
        return self.snapshot(code).n_selected

    def n_accepted(self, code: int = 0) -> int:
        return self.snapshot(code).n_accepted

    def sigma_gen(self, code: int = 0) -> float:
        return self.snapshot(code).sigma_gen

    def sigma_err(self, code: int = 0) -> float:
        return self.snapshot(code).sigma_err

    def weight_sum(self, code: int = 0) -> float:
        return self.snapshot(code).weight_sum
