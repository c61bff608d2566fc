from __future__ import annotations

from typing import Optional

from .access import DriverWriter, MPIWriter, PartonLevelWriter, ProcessWriter
from .config import InfoConfig
from .info import Info
from .state import InfoState


class GenerationContext:
    """One shared state per run (or per worker), with its role writers.

    The context is handed explicitly to every collaborator. Each collaborator
    keeps only the writer for its own role; users get ``info``.

    Example:
        ctx = GenerationContext()
        ctx.driver.set_cm(13000.0)
        ctx.driver.reset()
        ctx.process.set_type("g g -> g g", 111, 2)
        print(ctx.info.name())
    """

    def __init__(self, config: Optional[InfoConfig] = None) -> None:
        self.config = config or InfoConfig()
        self._state = InfoState.from_config(self.config)
        self.info = Info(self._state)
        self.driver = DriverWriter(self._state)
        self.process = ProcessWriter(self._state)
        self.parton = PartonLevelWriter(self._state)
        self.mpi = MPIWriter(self._state)
