"""
Role-scoped writers for the shared generation state.

Each producer role gets a writer exposing only the setters that role owns.
All writers of one context wrap the same ``InfoState``, so a value written by
one role is immediately visible through ``Info``. Every role may report
diagnostics and touch the loop counters.

Ownership:
  DriverWriter       beams, CM energy, per-event reset, end-of-file flag,
                     initialization warnings
  ProcessWriter      process identity, subprocess, PDFs and couplings,
                     kinematics, event weight, cross-section snapshot
  PartonLevelWriter  impact parameter, evolution scales and counts,
                     valence flags, matching internals
  MPIWriter          MPI entries, global a0
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, TextIO

from .counters import CounterIndex
from .models import ImpactParameter, MPIEntry, SubprocessInfo
from .state import InfoState


class _RoleWriter:
    def __init__(self, state: InfoState) -> None:
        self._state = state

    def record_diagnostic(
        self,
        message: str,
        extra: str = "",
        force_print: bool = False,
        sink: Optional[TextIO] = None,
    ) -> int:
        return self._state.diagnostics.record(message, extra, force_print=force_print, sink=sink)

    def set_counter(self, i: CounterIndex, value: int = 0) -> None:
        self._state.counters.set(i, value)

    def add_counter(self, i: CounterIndex, value: int = 1) -> None:
        self._state.counters.add(i, value)


class DriverWriter(_RoleWriter):
    """Setters owned by the top-level event-loop driver."""

    def set_beam_a(self, id_a: int, pz_a: float, e_a: float, m_a: float) -> None:
        beam = self._state.beam
        beam.id_a, beam.pz_a, beam.e_a, beam.m_a = id_a, pz_a, e_a, m_a

    def set_beam_b(self, id_b: int, pz_b: float, e_b: float, m_b: float) -> None:
        beam = self._state.beam
        beam.id_b, beam.pz_b, beam.e_b, beam.m_b = id_b, pz_b, e_b, m_b

    def set_cm(self, e_cm: float) -> None:
        self._state.beam.e_cm = e_cm
        self._state.beam.s = e_cm * e_cm

    def reset(self) -> None:
        """Return every event-scoped field to its default. Once per event."""
        self._state.reset_event()

    def set_end_of_file(self, at_eof: bool) -> None:
        self._state.event.at_end_of_file = at_eof

    def set_too_low_pt_min(self, too_low: bool) -> None:
        self._state.run.too_low_pt_min = too_low

    def error_reset(self) -> None:
        self._state.diagnostics.reset()

    def counter_reset(self) -> None:
        self._state.counters.reset()


class ProcessWriter(_RoleWriter):
    """Setters owned by process generation."""

    def set_type(
        self,
        name: str,
        code: int,
        n_final: int,
        is_min_bias: bool = False,
        is_resolved: bool = True,
        is_diffractive_a: bool = False,
        is_diffractive_b: bool = False,
        is_lha: bool = False,
    ) -> None:
        """Store the process identity.

        Also forgets any subprocess, impact parameter and evolution state left
        by an earlier trial of the same event.
        """
        ev = self._state.event
        ev.name = name
        ev.code = code
        ev.n_final = n_final
        ev.n_total = 2 + n_final
        ev.is_min_bias = is_min_bias
        ev.is_resolved = is_resolved
        ev.is_diffractive_a = is_diffractive_a
        ev.is_diffractive_b = is_diffractive_b
        ev.is_lha = is_lha
        ev.sub = None
        ev.evolution_set = False
        self._state.mpi.impact = None

    def set_sub_type(self, name_sub: str, code_sub: int, n_final_sub: int) -> None:
        self._state.event.sub = SubprocessInfo(name=name_sub, code=code_sub, n_final=n_final_sub)

    def set_pdf_and_couplings(
        self,
        id1: int,
        id2: int,
        pdf1: float,
        pdf2: float,
        q2_fac: float,
        alpha_em: float,
        alpha_s: float,
        q2_ren: float,
    ) -> None:
        ev = self._state.event
        ev.id1, ev.id2 = id1, id2
        ev.pdf1, ev.pdf2 = pdf1, pdf2
        ev.q2_fac, ev.q2_ren = q2_fac, q2_ren
        ev.alpha_em, ev.alpha_s = alpha_em, alpha_s

    def set_kinematics(
        self,
        x1: float,
        x2: float,
        s_hat: float,
        t_hat: float,
        u_hat: float,
        pt_hat: float,
        m3_hat: float,
        m4_hat: float,
        theta_hat: float,
        phi_hat: float,
    ) -> None:
        ev = self._state.event
        ev.x1, ev.x2 = x1, x2
        ev.s_hat, ev.t_hat, ev.u_hat = s_hat, t_hat, u_hat
        ev.pt_hat = pt_hat
        ev.m3_hat, ev.m4_hat = m3_hat, m4_hat
        ev.theta_hat, ev.phi_hat = theta_hat, phi_hat

    def set_weight(self, weight: float) -> None:
        self._state.event.weight = weight

    def set_sigma(
        self,
        n_tried: int,
        n_selected: int,
        n_accepted: int,
        sigma_gen: float,
        sigma_err: float,
        weight_sum: float,
        code: int = 0,
    ) -> None:
        self._state.sigma.update(
            n_tried, n_selected, n_accepted, sigma_gen, sigma_err, weight_sum, code=code
        )


class PartonLevelWriter(_RoleWriter):
    """Setters owned by parton-shower evolution."""

    def set_impact_parameter(self, b: float, enhance: float) -> None:
        mpi = self._state.mpi
        mpi.impact = ImpactParameter(b=b, enhance=enhance)
        if mpi.entries:
            mpi.entries[0] = replace(mpi.entries[0], enhance=enhance)

    def set_part_evolved(self, n_mpi: int, n_isr: int) -> None:
        ev = self._state.event
        ev.n_mpi, ev.n_isr = n_mpi, n_isr
        ev.part_evolved = True

    def set_evolution_scales(
        self,
        pt_max_mpi: float,
        pt_max_isr: float,
        pt_max_fsr: float,
        n_mpi: int,
        n_isr: int,
        n_fsr_in_proc: int,
        n_fsr_in_res: int,
    ) -> None:
        ev = self._state.event
        ev.pt_max_mpi, ev.pt_max_isr, ev.pt_max_fsr = pt_max_mpi, pt_max_isr, pt_max_fsr
        ev.n_mpi, ev.n_isr = n_mpi, n_isr
        ev.n_fsr_in_proc, ev.n_fsr_in_res = n_fsr_in_proc, n_fsr_in_res
        ev.evolution_set = True
        ev.part_evolved = True

    def set_pt_now(self, pt_now: float) -> None:
        self._state.event.pt_now = pt_now

    def set_valence(self, is_valence1: bool, is_valence2: bool) -> None:
        ev = self._state.event
        ev.is_valence1, ev.is_valence2 = is_valence1, is_valence2

    def set_history(
        self,
        has_history: bool,
        z_now_isr: Optional[float] = None,
        pt2_now_isr: Optional[float] = None,
    ) -> None:
        ev = self._state.event
        ev.has_history = has_history
        if z_now_isr is not None:
            ev.z_now_isr = z_now_isr
        if pt2_now_isr is not None:
            ev.pt2_now_isr = pt2_now_isr


class MPIWriter(_RoleWriter):
    """Setters owned by multiparton-interaction handling."""

    def append_mpi_entry(
        self, code: int, pt: float, i_a: int = 0, i_b: int = 0, enhance: float = 1.0
    ) -> None:
        mpi = self._state.mpi
        # Entry 0 carries the impact-parameter enhancement once one is set.
        if not mpi.entries and mpi.impact is not None:
            enhance = mpi.impact.enhance
        mpi.entries.append(MPIEntry(code=code, pt=pt, i_a=i_a, i_b=i_b, enhance=enhance))

    def set_a0(self, a0: float) -> None:
        self._state.run.a0_mpi = a0
