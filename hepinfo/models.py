"""
Core state records for hepinfo.

This module defines the plain data containers that make up the shared
generation state: beam description, the current event's subprocess and
kinematics, multiparton-interaction sub-records and the cross-section
snapshot. The records hold values computed elsewhere; they do not compute
physics themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class BeamRecord:
    """Incoming beams in the rest frame, and the CM energy of the event.

    Attributes:
        id_a, id_b: PDG codes of the two beam particles.
        pz_a, e_a, m_a: Longitudinal momentum, energy and mass of beam A (GeV).
        pz_b, e_b, m_b: Same for beam B.
        e_cm: Centre-of-mass energy (GeV).
        s: Squared CM energy. Always e_cm**2.
    """

    id_a: int = 0
    pz_a: float = 0.0
    e_a: float = 0.0
    m_a: float = 0.0
    id_b: int = 0
    pz_b: float = 0.0
    e_b: float = 0.0
    m_b: float = 0.0
    e_cm: float = 0.0
    s: float = 0.0


@dataclass(frozen=True)
class SubprocessInfo:
    """Hardest subprocess of a minimum-bias or Les Houches event."""

    name: str = ""
    code: int = 0
    n_final: int = 0


@dataclass
class EventRecord:
    """Per-event information. ``EventRecord()`` is the documented reset state.

    Attributes:
        name, code, n_final: Process identity and number of final-state
            particles of the hard process.
        n_total: 2 + n_final once a process type is set.
        is_resolved, is_diffractive_a, is_diffractive_b, is_min_bias, is_lha:
            Process classification flags.
        at_end_of_file: Set when an external Les Houches event file is
            exhausted.
        sub: Hardest subprocess, None when not identified.
        id1, id2, x1, x2: Incoming parton flavours and momentum fractions.
        pdf1, pdf2: Parton densities at (x, Q2Fac).
        q2_fac, q2_ren: Factorization and renormalization scales squared.
        alpha_s, alpha_em: Couplings of the hard process.
        is_valence1, is_valence2: Valence character of the incoming partons.
        s_hat ... phi_hat: Mandelstam variables, as if a 2 -> 2 subcollision.
        weight: Event weight. Normally 1.
        pt_max_mpi, pt_max_isr, pt_max_fsr: Starting scales of the evolution.
        pt_now: Current evolution scale.
        n_mpi, n_isr, n_fsr_in_proc, n_fsr_in_res: Evolution step counts.
        evolution_set: True once the evolution scales have been stored.
        part_evolved: True once an evolution step has reported n_mpi.
        has_history, z_now_isr, pt2_now_isr: Matching internals.
    """

    name: str = ""
    code: int = 0
    n_final: int = 0
    n_total: int = 0
    is_resolved: bool = False
    is_diffractive_a: bool = False
    is_diffractive_b: bool = False
    is_min_bias: bool = False
    is_lha: bool = False
    at_end_of_file: bool = False
    sub: Optional[SubprocessInfo] = None
    id1: int = 0
    id2: int = 0
    x1: float = 0.0
    x2: float = 0.0
    pdf1: float = 0.0
    pdf2: float = 0.0
    q2_fac: float = 0.0
    q2_ren: float = 0.0
    alpha_s: float = 0.0
    alpha_em: float = 0.0
    is_valence1: bool = False
    is_valence2: bool = False
    s_hat: float = 0.0
    t_hat: float = 0.0
    u_hat: float = 0.0
    pt_hat: float = 0.0
    m3_hat: float = 0.0
    m4_hat: float = 0.0
    theta_hat: float = 0.0
    phi_hat: float = 0.0
    weight: float = 1.0
    pt_max_mpi: float = 0.0
    pt_max_isr: float = 0.0
    pt_max_fsr: float = 0.0
    pt_now: float = 0.0
    n_mpi: int = 0
    n_isr: int = 0
    n_fsr_in_proc: int = 0
    n_fsr_in_res: int = 0
    evolution_set: bool = False
    part_evolved: bool = False
    has_history: bool = False
    z_now_isr: float = 0.0
    pt2_now_isr: float = 0.0

    @property
    def has_sub(self) -> bool:
        return self.sub is not None


@dataclass(frozen=True)
class MPIEntry:
    """One multiparton sub-interaction.

    Attributes:
        code: Process code of the sub-interaction.
        pt: Transverse momentum of the scattering.
        i_a, i_b: Indices of the incoming partons in the beam remnants.
        enhance: Enhancement factor from the impact-parameter picture.
    """

    code: int
    pt: float
    i_a: int = 0
    i_b: int = 0
    enhance: float = 1.0


@dataclass(frozen=True)
class ImpactParameter:
    """Impact parameter and enhancement, as set by the hardest interaction."""

    b: float
    enhance: float


@dataclass
class MultipartonRecord:
    """Ordered MPI entries of the current event plus impact-parameter state."""

    entries: list[MPIEntry] = field(default_factory=list)
    impact: Optional[ImpactParameter] = None

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class CrossSectionSnapshot:
    """Latest cross-section estimate supplied by the process producer.

    Attributes:
        n_tried, n_selected, n_accepted: Trial counts.
        sigma_gen, sigma_err: Estimated cross section and its error (mb).
        weight_sum: Sum of accepted event weights.
    """

    n_tried: int = 0
    n_selected: int = 0
    n_accepted: int = 0
    sigma_gen: float = 0.0
    sigma_err: float = 0.0
    weight_sum: float = 0.0


@dataclass
class RunLevel:
    """Run-scoped values that survive the per-event reset."""

    a0_mpi: float = 0.0
    too_low_pt_min: bool = False
