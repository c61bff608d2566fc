"""hepinfo: event-generation information and diagnostics bookkeeping."""

from __future__ import annotations

__version__ = "0.1.0"

from .config import InfoConfig, RunConfig
from .context import GenerationContext
from .counters import Counter, CounterBank
from .diagnostics import DiagnosticLog
from .info import Info
from .models import CrossSectionSnapshot, ImpactParameter, MPIEntry
from .sigma import CrossSectionAccumulator

__all__ = [
    "__version__",
    "GenerationContext",
    "Info",
    "InfoConfig",
    "RunConfig",
    "Counter",
    "CounterBank",
    "DiagnosticLog",
    "CrossSectionAccumulator",
    "CrossSectionSnapshot",
    "ImpactParameter",
    "MPIEntry",
]
