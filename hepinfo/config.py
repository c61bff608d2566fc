from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass(frozen=True)
class InfoConfig:
    """Settings for one generation context.

    times_to_print: how many times an identical diagnostic is echoed.
    n_counters: size of the loop-counter bank.
    sink: default stream for diagnostic echoes and reports (None = stdout).
    """

    times_to_print: int = 1
    n_counters: int = 50
    sink: Optional[TextIO] = None

    def __post_init__(self) -> None:
        if self.times_to_print < 1:
            raise ValueError("times_to_print must be >= 1")
        if self.n_counters <= 0:
            raise ValueError("n_counters must be > 0")


@dataclass(frozen=True)
class RunConfig:
    """Settings for the toy event loop (see ``hepinfo.driver``)."""

    n_events: int = 100
    seed: int = 12345
    id_a: int = 2212
    id_b: int = 2212
    e_cm: float = 13000.0
    pt_min: float = 2.0
    times_allowed_errors: int = 10

    def __post_init__(self) -> None:
        if self.n_events < 0:
            raise ValueError("n_events must be >= 0")
        if self.e_cm <= 0:
            raise ValueError("e_cm must be > 0")
        if self.pt_min <= 0:
            raise ValueError("pt_min must be > 0")
