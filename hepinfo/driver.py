"""
Toy event loop that drives every producer role.

Nothing here is physics: partons, scales and weights are drawn from simple
shapes so that the bookkeeping can be exercised end to end (and shown by the
``hepinfo run`` command). The pipeline per event is

    reset -> process type -> PDFs/couplings -> kinematics -> MPI entries
          -> impact parameter -> evolution scales

Each stage only holds the writer for its own role.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from . import pdg
from .access import MPIWriter, PartonLevelWriter, ProcessWriter
from .config import RunConfig
from .context import GenerationContext
from .counters import Counter

LAMBDA_QCD = 0.2
Q2_FREEZE = 1.0  # GeV^2, the coupling is frozen below this scale
ALPHA_EM = 1.0 / 137.036


@dataclass(frozen=True)
class ToyProcess:
    name: str
    code: int
    n_final: int
    sigma_max: float  # mb
    is_min_bias: bool = False


PROCESSES = (
    ToyProcess("g g -> g g", 111, 2, 30.0),
    ToyProcess("q g -> q g", 113, 2, 20.0),
    ToyProcess("q q -> q q", 114, 2, 5.0),
    ToyProcess("non-diffractive", 101, 0, 50.0, is_min_bias=True),
)


def alpha_s(q2: float) -> float:
    """One-loop running coupling for five flavours, frozen below Q2_FREEZE."""
    q2 = max(q2, Q2_FREEZE)
    return 12.0 * math.pi / (23.0 * math.log(q2 / LAMBDA_QCD ** 2))


class ToyProcessLevel:
    """Picks a process, its partons and kinematics, and keeps the cross section.

    The running estimate is a hit-or-miss average over all trials:
    sigma = sum(sigma_max * p) / n_tried, with error sigma / sqrt(n_accepted).
    """

    def __init__(self, writer: ProcessWriter, rng: random.Random, s: float, pt_min: float) -> None:
        self.writer = writer
        self.rng = rng
        self.s = s
        self.pt_min = pt_min
        self.n_tried = 0
        self.n_selected = 0
        self.n_accepted = 0
        self.weight_sum = 0.0
        self._sum_sigma = 0.0
        self._per_code: Dict[int, List[float]] = {p.code: [0, 0, 0, 0.0] for p in PROCESSES}
        self.current: Optional[ToyProcess] = None

    def _pick(self) -> ToyProcess:
        total = sum(p.sigma_max for p in PROCESSES)
        r = self.rng.random() * total
        for p in PROCESSES:
            r -= p.sigma_max
            if r <= 0:
                return p
        return PROCESSES[-1]

    def next(self, max_tries: int = 100) -> bool:
        """Try until one phase-space point is accepted. Returns False on failure."""
        w = self.writer
        tau_min = (2.0 * self.pt_min) ** 2 / self.s
        for _ in range(max_tries):
            proc = self._pick()
            self.n_tried += 1
            self._per_code[proc.code][0] += 1
            w.add_counter(Counter.PROCESS_TRIED)

            x1 = tau_min ** self.rng.random()
            x2 = tau_min ** self.rng.random()
            s_hat = x1 * x2 * self.s
            if s_hat < 4.0 * self.pt_min ** 2:
                continue
            pt2_max = s_hat / 4.0
            r = self.rng.random()
            pt2 = self.pt_min ** 2 / (1.0 - r * (1.0 - self.pt_min ** 2 / pt2_max))
            prob = self.pt_min ** 2 / pt2
            self._sum_sigma += proc.sigma_max * prob
            self._per_code[proc.code][3] += proc.sigma_max * prob
            if self.rng.random() > prob:
                continue

            self.n_selected += 1
            self._per_code[proc.code][1] += 1
            w.add_counter(Counter.PROCESS_SELECTED)
            self.current = proc
            self._write(proc, x1, x2, s_hat, pt2)
            return True

        w.record_diagnostic("Error in ToyProcessLevel::next:", "no phase-space point accepted")
        return False

    def _write(self, proc: ToyProcess, x1: float, x2: float, s_hat: float, pt2: float) -> None:
        w = self.writer
        w.set_type(proc.name, proc.code, proc.n_final, is_min_bias=proc.is_min_bias)
        if proc.is_min_bias:
            w.set_sub_type("g g -> g g", 111, 2)

        id1 = 21 if self.rng.random() < 0.7 else self.rng.choice((1, 2, -1, -2))
        id2 = 21 if self.rng.random() < 0.7 else self.rng.choice((1, 2, -1, -2))
        w.set_pdf_and_couplings(
            id1, id2,
            (1.0 - x1) ** 3 / x1, (1.0 - x2) ** 3 / x2,
            pt2, ALPHA_EM, alpha_s(pt2), pt2,
        )

        cos_theta = math.sqrt(max(0.0, 1.0 - 4.0 * pt2 / s_hat))
        if self.rng.random() < 0.5:
            cos_theta = -cos_theta
        w.set_kinematics(
            x1, x2, s_hat,
            -0.5 * s_hat * (1.0 - cos_theta), -0.5 * s_hat * (1.0 + cos_theta),
            math.sqrt(pt2), 0.0, 0.0,
            math.acos(cos_theta), 2.0 * math.pi * self.rng.random(),
        )
        w.set_weight(1.0)

    def accept(self) -> None:
        """The driver kept the current event: refresh the cross-section snapshot."""
        proc = self.current
        self.n_accepted += 1
        self.weight_sum += 1.0
        self._per_code[proc.code][2] += 1
        sigma = self._sum_sigma / self.n_tried
        self.writer.set_sigma(
            self.n_tried, self.n_selected, self.n_accepted,
            sigma, sigma / math.sqrt(self.n_accepted), self.weight_sum,
        )
        n_try, n_sel, n_acc, sum_sigma = self._per_code[proc.code]
        sigma_code = sum_sigma / self.n_tried
        self.writer.set_sigma(
            n_try, n_sel, n_acc, sigma_code, sigma_code / math.sqrt(n_acc), float(n_acc),
            code=proc.code,
        )


class ToyMPI:
    """Adds secondary scatterings below the hard scale."""

    def __init__(self, writer: MPIWriter, rng: random.Random, pt_min: float) -> None:
        self.writer = writer
        self.rng = rng
        self.pt_min = pt_min
        writer.set_a0(0.5 * pt_min)

    def next(self, hard_code: int, pt_hard: float) -> int:
        w = self.writer
        w.append_mpi_entry(hard_code, pt_hard, 0, 0)
        pt = pt_hard
        n = 1
        while True:
            pt *= math.sqrt(self.rng.random())
            if pt < self.pt_min:
                break
            n += 1
            w.append_mpi_entry(self.rng.choice((111, 112, 113, 114)), pt, n, n)
        return n


class ToyPartonLevel:
    """Sets the impact parameter and the shower starting scales.

    Occasionally reports an ISR branching below the cutoff, and vetoes a small
    fraction of events to exercise the abort path.
    """

    def __init__(
        self,
        writer: PartonLevelWriter,
        rng: random.Random,
        pt_min: float,
        veto_probability: float = 0.02,
    ) -> None:
        self.writer = writer
        self.rng = rng
        self.pt_min = pt_min
        self.veto_probability = veto_probability

    def next(self, pt_hard: float, n_mpi: int) -> bool:
        w = self.writer
        w.add_counter(Counter.PARTON_LEVEL_TRIED)
        b = self.rng.expovariate(1.0)
        w.set_impact_parameter(b, 2.0 * math.exp(-0.5 * b * b))
        w.set_valence(self.rng.random() < 0.3, self.rng.random() < 0.3)

        n_isr = int(self.rng.expovariate(0.3))
        n_fsr = int(self.rng.expovariate(0.3))
        if self.rng.random() < 0.05:
            w.record_diagnostic("pT below cutoff", "ISR")
        if self.rng.random() < self.veto_probability:
            w.add_counter(Counter.PARTON_LEVEL_VETOED)
            w.record_diagnostic("Error in ToyPartonLevel::next:", "parton-level evolution failed")
            return False

        w.set_evolution_scales(pt_hard, pt_hard, pt_hard, n_mpi, n_isr, n_fsr, 0)
        w.set_pt_now(self.pt_min)
        return True


class EventLoop:
    """Runs the producer pipeline for one context, one event per ``next()``."""

    def __init__(self, ctx: GenerationContext, config: RunConfig) -> None:
        self.ctx = ctx
        self.config = config
        rng = random.Random(config.seed)
        s = config.e_cm ** 2
        self.process = ToyProcessLevel(ctx.process, rng, s, config.pt_min)
        self.mpi = ToyMPI(ctx.mpi, rng, config.pt_min)
        self.parton = ToyPartonLevel(ctx.parton, rng, config.pt_min)
        self.n_failed = 0
        self.aborted = False
        self._init_beams()

    def _init_beams(self) -> None:
        cfg = self.config
        d = self.ctx.driver
        m_a = pdg.mass_gev(cfg.id_a) or 0.0
        m_b = pdg.mass_gev(cfg.id_b) or 0.0
        # Both beams along z in the CM frame.
        e_a = 0.5 * (cfg.e_cm ** 2 + m_a ** 2 - m_b ** 2) / cfg.e_cm
        e_b = cfg.e_cm - e_a
        pz = math.sqrt(max(0.0, e_a ** 2 - m_a ** 2))
        d.set_beam_a(cfg.id_a, pz, e_a, m_a)
        d.set_beam_b(cfg.id_b, -pz, e_b, m_b)
        d.set_cm(cfg.e_cm)
        d.set_too_low_pt_min(cfg.pt_min < 1.0)
        if cfg.pt_min < 1.0:
            d.record_diagnostic("Warning in EventLoop::init:", "too low pTmin")

    def next(self) -> bool:
        d = self.ctx.driver
        d.add_counter(Counter.NEXT_CALLED)
        d.reset()

        if not self.process.next():
            self.n_failed += 1
            return False
        d.add_counter(Counter.PROCESS_LEVEL_OK)

        info = self.ctx.info
        n_mpi = self.mpi.next(info.code_sub() or info.code(), info.pt_hat())
        if not self.parton.next(info.pt_hat(), n_mpi):
            self.n_failed += 1
            return False
        d.add_counter(Counter.PARTON_LEVEL_OK)
        d.add_counter(Counter.HADRON_LEVEL_OK)

        self.process.accept()
        d.add_counter(Counter.EVENT_ACCEPTED)
        return True

    def too_many_errors(self) -> bool:
        return self.n_failed >= self.config.times_allowed_errors

    def run(self, on_event: Optional[Callable[[GenerationContext], None]] = None) -> int:
        """Generate ``n_events``; stop after too many failures. Returns successes.

        ``on_event`` is called with the context after every accepted event.
        """
        n_ok = 0
        for _ in range(self.config.n_events):
            if self.next():
                n_ok += 1
                if on_event is not None:
                    on_event(self.ctx)
            elif self.too_many_errors():
                self.aborted = True
                self.ctx.driver.record_diagnostic(
                    "Abort from EventLoop::run:", "too many generation failures", force_print=True
                )
                break
        return n_ok


def run_toy(config: RunConfig, ctx: Optional[GenerationContext] = None) -> GenerationContext:
    """Run the toy loop in a fresh (or given) context and return it."""
    ctx = ctx or GenerationContext()
    EventLoop(ctx, config).run()
    return ctx
