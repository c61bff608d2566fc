"""
Read-only query surface over the generation state.

``Info`` is what users, statistics printers and user hooks get to see. It
never mutates the state; all writes go through the role writers in
``hepinfo.access``. Values are only meaningful once the producer pipeline of
the current event has finished.
"""

from __future__ import annotations

import math
from dataclasses import asdict
from typing import Any, Dict, List, Optional, TextIO, Tuple

from . import pdg
from .counters import CounterIndex
from .diagnostics import DiagnosticKey
from .models import CrossSectionSnapshot, ImpactParameter, MPIEntry
from .state import InfoState


def sqrtpos(x: float) -> float:
    return math.sqrt(max(0.0, x))


class Info:
    """Beam, process, kinematics, MPI, cross-section and error information."""

    def __init__(self, state: InfoState) -> None:
        self._state = state

    # --- Beams ---
    def id_a(self) -> int:
        return self._state.beam.id_a

    def id_b(self) -> int:
        return self._state.beam.id_b

    def pz_a(self) -> float:
        return self._state.beam.pz_a

    def pz_b(self) -> float:
        return self._state.beam.pz_b

    def e_a(self) -> float:
        return self._state.beam.e_a

    def e_b(self) -> float:
        return self._state.beam.e_b

    def m_a(self) -> float:
        return self._state.beam.m_a

    def m_b(self) -> float:
        return self._state.beam.m_b

    def e_cm(self) -> float:
        return self._state.beam.e_cm

    def s(self) -> float:
        return self._state.beam.s

    # --- Initialization warnings ---
    def too_low_pt_min(self) -> bool:
        return self._state.run.too_low_pt_min

    # --- Process identity ---
    def name(self) -> str:
        return self._state.event.name

    def code(self) -> int:
        return self._state.event.code

    def n_final(self) -> int:
        return self._state.event.n_final

    def n_total(self) -> int:
        return self._state.event.n_total

    def is_resolved(self) -> bool:
        return self._state.event.is_resolved

    def is_diffractive_a(self) -> bool:
        return self._state.event.is_diffractive_a

    def is_diffractive_b(self) -> bool:
        return self._state.event.is_diffractive_b

    def is_min_bias(self) -> bool:
        return self._state.event.is_min_bias

    def is_lha(self) -> bool:
        return self._state.event.is_lha

    def at_end_of_file(self) -> bool:
        return self._state.event.at_end_of_file

    # --- Hardest subprocess (minimum bias, Les Houches) ---
    def has_sub(self) -> bool:
        return self._state.event.has_sub

    def name_sub(self) -> str:
        sub = self._state.event.sub
        return sub.name if sub is not None else ""

    def code_sub(self) -> int:
        sub = self._state.event.sub
        return sub.code if sub is not None else 0

    def n_final_sub(self) -> int:
        sub = self._state.event.sub
        return sub.n_final if sub is not None else 0

    # --- Incoming partons, PDFs, couplings, scales ---
    def id1(self) -> int:
        return self._state.event.id1

    def id2(self) -> int:
        return self._state.event.id2

    def x1(self) -> float:
        return self._state.event.x1

    def x2(self) -> float:
        return self._state.event.x2

    def y(self) -> float:
        """Rapidity of the hard subsystem, 0 when x1 or x2 is unset."""
        ev = self._state.event
        if ev.x1 <= 0 or ev.x2 <= 0:
            return 0.0
        return 0.5 * math.log(ev.x1 / ev.x2)

    def tau(self) -> float:
        return self._state.event.x1 * self._state.event.x2

    def pdf1(self) -> float:
        return self._state.event.pdf1

    def pdf2(self) -> float:
        return self._state.event.pdf2

    def q_fac(self) -> float:
        return sqrtpos(self._state.event.q2_fac)

    def q2_fac(self) -> float:
        return self._state.event.q2_fac

    def q_ren(self) -> float:
        return sqrtpos(self._state.event.q2_ren)

    def q2_ren(self) -> float:
        return self._state.event.q2_ren

    def is_valence1(self) -> bool:
        return self._state.event.is_valence1

    def is_valence2(self) -> bool:
        return self._state.event.is_valence2

    def alpha_s(self) -> float:
        return self._state.event.alpha_s

    def alpha_em(self) -> float:
        return self._state.event.alpha_em

    # --- Mandelstam variables ---
    def m_hat(self) -> float:
        return sqrtpos(self._state.event.s_hat)

    def s_hat(self) -> float:
        return self._state.event.s_hat

    def t_hat(self) -> float:
        return self._state.event.t_hat

    def u_hat(self) -> float:
        return self._state.event.u_hat

    def pt_hat(self) -> float:
        return self._state.event.pt_hat

    def pt2_hat(self) -> float:
        return self._state.event.pt_hat ** 2

    def m3_hat(self) -> float:
        return self._state.event.m3_hat

    def m4_hat(self) -> float:
        return self._state.event.m4_hat

    def theta_hat(self) -> float:
        return self._state.event.theta_hat

    def phi_hat(self) -> float:
        return self._state.event.phi_hat

    # --- Weights ---
    def weight(self) -> float:
        return self._state.event.weight

    def weight_sum(self) -> float:
        return self._state.sigma.weight_sum()

    # --- Evolution ---
    def n_isr(self) -> int:
        return self._state.event.n_isr

    def n_fsr_in_proc(self) -> int:
        return self._state.event.n_fsr_in_proc

    def n_fsr_in_res(self) -> int:
        return self._state.event.n_fsr_in_res

    def pt_max_mpi(self) -> float:
        return self._state.event.pt_max_mpi

    def pt_max_isr(self) -> float:
        return self._state.event.pt_max_isr

    def pt_max_fsr(self) -> float:
        return self._state.event.pt_max_fsr

    def pt_now(self) -> float:
        return self._state.event.pt_now

    def evolution_set(self) -> bool:
        return self._state.event.evolution_set

    def has_history(self) -> bool:
        return self._state.event.has_history

    def z_now_isr(self) -> float:
        return self._state.event.z_now_isr

    def pt2_now_isr(self) -> float:
        return self._state.event.pt2_now_isr

    # --- Impact parameter ---
    def a0_mpi(self) -> float:
        return self._state.run.a0_mpi

    def impact_parameter(self) -> Optional[ImpactParameter]:
        """The impact parameter of this event, or None if not set."""
        return self._state.mpi.impact

    def b_mpi(self) -> float:
        impact = self._state.mpi.impact
        return impact.b if impact is not None else 1.0

    def enhance_mpi(self) -> float:
        impact = self._state.mpi.impact
        return impact.enhance if impact is not None else 1.0

    def e_mpi(self, i: int) -> float:
        if self._state.mpi.impact is None:
            return 1.0
        return self._state.mpi.entries[i].enhance

    # --- Multiparton interactions ---
    def n_mpi(self) -> int:
        """Number of interactions, as reported by the evolution if available."""
        ev = self._state.event
        return ev.n_mpi if ev.part_evolved else len(self._state.mpi.entries)

    def mpi_entries(self) -> List[MPIEntry]:
        return list(self._state.mpi.entries)

    def code_mpi(self, i: int) -> int:
        return self._state.mpi.entries[i].code

    def pt_mpi(self, i: int) -> float:
        return self._state.mpi.entries[i].pt

    def i_a_mpi(self, i: int) -> int:
        return self._state.mpi.entries[i].i_a

    def i_b_mpi(self, i: int) -> int:
        return self._state.mpi.entries[i].i_b

    # --- Cross sections ---
    def sigma(self, code: int = 0) -> CrossSectionSnapshot:
        return self._state.sigma.snapshot(code)

    def n_tried(self, code: int = 0) -> int:
        return self._state.sigma.n_tried(code)

    def n_selected(self, code: int = 0) -> int:
        return self._state.sigma.n_selected(code)

    def n_accepted(self, code: int = 0) -> int:
        return self._state.sigma.n_accepted(code)

    def sigma_gen(self, code: int = 0) -> float:
        return self._state.sigma.sigma_gen(code)

    def sigma_err(self, code: int = 0) -> float:
        return self._state.sigma.sigma_err(code)

    def sigma_codes(self) -> List[int]:
        return self._state.sigma.codes()

    # --- Counters ---
    def get_counter(self, i: CounterIndex) -> int:
        return self._state.counters.get(i)

    def counters(self) -> Dict[str, int]:
        return self._state.counters.as_dict()

    # --- Errors and warnings ---
    def error_total_number(self) -> int:
        return self._state.diagnostics.total_count()

    def error_count(self, message: str, extra: str = "") -> int:
        return self._state.diagnostics.count(message, extra)

    def error_messages(self) -> List[Tuple[DiagnosticKey, int]]:
        """Every distinct (message, extra) with its count, sorted by key."""
        return list(self._state.diagnostics.items())

    def error_statistics(self, sink: Optional[TextIO] = None) -> None:
        self._state.diagnostics.report(sink)

    # --- Dumps ---
    def to_dict(self) -> Dict[str, Any]:
        """Flat snapshot of the current event plus run-level values."""
        ev = asdict(self._state.event)
        sub = ev.pop("sub")
        ev["has_sub"] = sub is not None
        ev["name_sub"] = sub["name"] if sub else ""
        ev["code_sub"] = sub["code"] if sub else 0
        ev["n_final_sub"] = sub["n_final"] if sub else 0
        impact = self._state.mpi.impact
        return {
            **{f"beam_{k}": v for k, v in asdict(self._state.beam).items()},
            **ev,
            "mpi_codes": [e.code for e in self._state.mpi.entries],
            "mpi_pts": [e.pt for e in self._state.mpi.entries],
            "b_mpi": impact.b if impact is not None else None,
            "enhance_mpi": impact.enhance if impact is not None else None,
            "a0_mpi": self._state.run.a0_mpi,
        }

    def list(self, sink: Optional[TextIO] = None) -> None:
        """Print most of the available information on the current event."""
        out = self._state.diagnostics.stream(sink)
        beam = self._state.beam
        ev = self._state.event

        def line(text: str = "") -> None:
            print(f" | {text:<74s} |", file=out)

        print(f"\n *{' hepinfo Info Listing ':-^78}*", file=out)
        line()
        line(f"Beam A: id = {beam.id_a:>10d} ({pdg.name(beam.id_a)}), "
             f"pz = {beam.pz_a:10.3e}, e = {beam.e_a:10.3e}, m = {beam.m_a:10.3e}")
        line(f"Beam B: id = {beam.id_b:>10d} ({pdg.name(beam.id_b)}), "
             f"pz = {beam.pz_b:10.3e}, e = {beam.e_b:10.3e}, m = {beam.m_b:10.3e}")
        line()
        if ev.is_lha:
            line("Process from an external Les Houches Accord source")
        line(f"In 1: id = {ev.id1:>4d}, x = {ev.x1:10.3e}, pdf = {ev.pdf1:10.3e} "
             f"at Q2 = {ev.q2_fac:10.3e}")
        line(f"In 2: id = {ev.id2:>4d}, x = {ev.x2:10.3e}, pdf = {ev.pdf2:10.3e} "
             f"at same Q2")
        line()
        kind = "minimum bias" if ev.is_min_bias else "hard"
        line(f"Process {ev.name!r} with code {ev.code} is {kind}, "
             f"{'' if ev.is_resolved else 'un'}resolved")
        if ev.is_diffractive_a or ev.is_diffractive_b:
            line(f"Diffractive: A = {ev.is_diffractive_a}, B = {ev.is_diffractive_b}")
        if ev.sub is not None:
            line(f"Hardest subprocess {ev.sub.name!r} with code {ev.sub.code}")
        line(f"It has sHat = {ev.s_hat:10.3e}, tHat = {ev.t_hat:10.3e}, "
             f"uHat = {ev.u_hat:10.3e}")
        line(f"       pTHat = {ev.pt_hat:10.3e}, m3Hat = {ev.m3_hat:10.3e}, "
             f"m4Hat = {ev.m4_hat:10.3e}")
        line(f"    thetaHat = {ev.theta_hat:10.3e}, phiHat = {ev.phi_hat:10.3e}")
        line(f"alphaEM = {ev.alpha_em:10.3e}, alphaS = {ev.alpha_s:10.3e} "
             f"at Q2 = {ev.q2_ren:10.3e}")
        line(f"weight = {ev.weight:10.3e}")
        if self._state.mpi.entries:
            line()
            line(f"Number of multiparton interactions: {self.n_mpi()}")
            for i, e in enumerate(self._state.mpi.entries):
                line(f"  {i:>3d}: code = {e.code:>4d}, pT = {e.pt:10.3e}, "
                     f"enhance = {e.enhance:10.3e}")
        if self._state.mpi.impact is not None:
            line(f"Impact parameter b = {self.b_mpi():10.3e} "
                 f"gives enhancement factor {self.enhance_mpi():10.3e}")
        if ev.evolution_set:
            line()
            line(f"Max pT scale for MPI = {ev.pt_max_mpi:10.3e}, "
                 f"ISR = {ev.pt_max_isr:10.3e}, FSR = {ev.pt_max_fsr:10.3e}")
            line(f"Number of MPI = {ev.n_mpi}, ISR = {ev.n_isr}, "
                 f"FSRproc = {ev.n_fsr_in_proc}, FSRreson = {ev.n_fsr_in_res}")
        line()
        print(f" *{' End Info Listing ':-^78}*", file=out)
