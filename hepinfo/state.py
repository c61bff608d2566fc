from __future__ import annotations

from dataclasses import dataclass, field

from .config import InfoConfig
from .counters import CounterBank
from .diagnostics import DiagnosticLog
from .models import BeamRecord, EventRecord, MultipartonRecord, RunLevel
from .sigma import CrossSectionAccumulator


@dataclass
class InfoState:
    """Everything one generation context knows, shared by all role writers.

    ``event`` and ``mpi`` are event-scoped; the rest persists for the run.
    """

    beam: BeamRecord = field(default_factory=BeamRecord)
    event: EventRecord = field(default_factory=EventRecord)
    mpi: MultipartonRecord = field(default_factory=MultipartonRecord)
    run: RunLevel = field(default_factory=RunLevel)
    sigma: CrossSectionAccumulator = field(default_factory=CrossSectionAccumulator)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    counters: CounterBank = field(default_factory=CounterBank)

    @classmethod
    def from_config(cls, cfg: InfoConfig) -> "InfoState":
        return cls(
            diagnostics=DiagnosticLog(times_to_print=cfg.times_to_print, sink=cfg.sink),
            counters=CounterBank(size=cfg.n_counters),
        )

    def reset_event(self) -> None:
        self.event = EventRecord()
        self.mpi = MultipartonRecord()
