"""PDG helpers backed by scikit-hep ``particle``.

Beam codes include nuclei (e.g. 1000080160) and generator-internal codes
that the particle table does not know; those are shown as plain numbers.
"""

from __future__ import annotations

from typing import Optional

from particle import InvalidParticle, Particle, ParticleNotFound


def name(pdg_id: int) -> str:
    if pdg_id == 0:
        return "-"
    try:
        return Particle.from_pdgid(pdg_id).name
    except (InvalidParticle, ParticleNotFound):
        return str(pdg_id)


def mass_gev(pdg_id: int) -> Optional[float]:
    """Nominal mass in GeV, or None when the table has no value."""
    try:
        p = Particle.from_pdgid(pdg_id)
    except (InvalidParticle, ParticleNotFound):
        return None
    if p.mass is None:
        return None
    return float(p.mass) / 1000.0
