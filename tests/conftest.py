"""Shared fixtures.

Every test gets its own ``GenerationContext`` whose diagnostic echoes go to an
in-memory stream, so console output can be asserted on line by line.
"""

from __future__ import annotations

import io

import pytest

from hepinfo import GenerationContext, InfoConfig


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def ctx(sink: io.StringIO) -> GenerationContext:
    return GenerationContext(InfoConfig(sink=sink))


def produce_event(ctx: GenerationContext, n_mpi: int = 2) -> None:
    """Run one event through the producer pipeline with fixed values."""
    ctx.driver.reset()
    ctx.process.set_type("g g -> g g", 111, 2)
    ctx.process.set_pdf_and_couplings(21, 21, 3.5, 2.5, 100.0, 0.0073, 0.118, 400.0)
    ctx.process.set_kinematics(0.01, 0.04, 67600.0, -200.0, -67400.0, 10.0, 0.0, 0.0, 0.1, 1.5)
    for i in range(n_mpi):
        ctx.mpi.append_mpi_entry(111, 10.0 / (i + 1), i, i)
    ctx.parton.set_impact_parameter(0.8, 1.3)
    ctx.parton.set_evolution_scales(10.0, 10.0, 10.0, n_mpi, 3, 2, 0)


@pytest.fixture
def filled_ctx(ctx: GenerationContext) -> GenerationContext:
    ctx.driver.set_beam_a(2212, 6500.0, 6500.0, 0.938)
    ctx.driver.set_beam_b(2212, -6500.0, 6500.0, 0.938)
    ctx.driver.set_cm(13000.0)
    produce_event(ctx)
    return ctx
