"""Working particle representation and its reconstruction from a restart file."""

import numpy as np

from .errors import FormatError
from .types import ParticleType


class Particle:
    """Particle state advanced by the transport engine.

    The *_last attributes hold the state before the most recent event;
    transport and tally code score deltas against them.
    """

    def __init__(self):
        self.id = 0
        self.type = ParticleType.NEUTRON
        self.wgt = 1.0
        self.E = 0.0
        self.g = 0
        self.r = np.zeros(3)
        self.u = np.array([0.0, 0.0, 1.0])

        self.wgt_last = 1.0
        self.E_last = 0.0
        self.g_last = 0
        self.r_last = np.zeros(3)
        self.r_last_current = np.zeros(3)
        self.u_last = np.array([0.0, 0.0, 1.0])

        self.alive = True
        self.cell = -1
        self.n_event = 0
        self.n_collision = 0
        self.fate = None

        self.write_track = False
        self.tracks: list[tuple] = []

    def prime_last_state(self):
        """Copy current state into the shadow fields so the first step has zero delta."""
        self.wgt_last = self.wgt
        self.r_last_current = self.r.copy()
        self.r_last = self.r.copy()
        self.u_last = self.u.copy()
        self.E_last = self.E
        self.g_last = self.g

    def record_track_state(self):
        if self.write_track:
            self.tracks.append((tuple(self.r), self.E, self.wgt))

    def __repr__(self):
        return (f"Particle(id={self.id}, type={self.type.name}, E={self.E:.6g}, "
                f"g={self.g}, wgt={self.wgt:.6g}, r={tuple(self.r)}, alive={self.alive})")


def reconstruct_particle(record, run_ce: bool, energy_table=None) -> Particle:
    """Build the working particle from a loaded CheckpointRecord.

    In multigroup mode the stored energy is a group index and the particle's
    energy becomes that group's tabulated average from energy_table. Raises
    FormatError before any particle exists if the group index is unusable.
    """
    if run_ce:
        energy = float(record.energy)
        group = 0
    else:
        if energy_table is None:
            raise ValueError("Multigroup reconstruction needs an energy table")
        group = _group_index(record.energy, energy_table.num_groups)
        energy = energy_table.energy_bin_average(group)

    p = Particle()
    p.id = record.id
    p.type = record.type
    p.wgt = record.weight
    p.E = energy
    p.g = group
    p.r = np.array(record.position, dtype=np.float64)
    p.u = np.array(record.direction, dtype=np.float64)
    p.prime_last_state()
    return p


def _group_index(stored, num_groups: int) -> int:
    value = float(stored)
    if not value.is_integer():
        raise FormatError("energy", f"multigroup group index must be integral, got {stored!r}")
    group = int(value)
    if not 0 <= group < num_groups:
        raise FormatError("energy", f"group index {group} outside [0, {num_groups})")
    return group
