"""History-based multigroup transport of a single particle.

Physics:
  - Sample distance to collision: d = -log(xi) / sigma_t
  - Track to boundary or collision site
  - Vacuum BC: particle leaks
  - Reflective BC: reflect direction about the surface normal, same cell
  - Transmissive surface: move past it, find the new cell, resample the
    collision distance if the material changed
  - Collision: absorption vs scatter based on sigma_a / sigma_t
  - Scatter: outgoing group from the scatter matrix row, isotropic direction

All random numbers come from the tracking stream of the generator passed in,
so a history is reproduced exactly once the stream is seeded.
"""

import logging
import math

import numpy as np

from .errors import TransportError
from .geometry import Geometry, BUMP_DISTANCE
from .rng import default_streams
from .tally import TallyStore
from .types import BoundaryCondition, ParticleFate, MAX_EVENTS

logger = logging.getLogger(__name__)


class TransportEngine:
    """Advances one particle through a Geometry until its history ends."""

    def __init__(self, geometry: Geometry, tallies: TallyStore | None = None,
                 streams=None, energy_groups=None, max_events: int = MAX_EVENTS):
        """
        Args:
            geometry: Geometry whose materials are mgxs.Material objects.
            tallies: Store scored at each collision.
            streams: LCGStreams to draw from (defaults to the shared generator).
            energy_groups: EnergyGroups used to map continuous energies onto
                groups and groups back onto energies.
            max_events: Events after which the history is killed.
        """
        if max_events < 1:
            raise ValueError(f"max_events must be at least 1, got {max_events}")
        self.geometry = geometry
        self.tallies = tallies if tallies is not None else TallyStore()
        self.streams = streams if streams is not None else default_streams
        self.energy_groups = energy_groups
        self.max_events = max_events

    def transport(self, p) -> ParticleFate:
        """Transport particle p in place and return how its history ended."""
        # A continuous energy that is not a group average enters the group containing it
        if self.energy_groups is not None and p.E != self.energy_groups.energy_bin_average(p.g):
            p.g = self.energy_groups.find_group(p.E)

        p.cell = self.geometry.find_cell(p.r)
        if p.cell < 0:
            raise TransportError("Particle born outside the geometry", p.id, p.r)
        p.record_track_state()

        material = self._material(p)
        d_collision = self._sample_collision_distance(p, material)

        while p.alive:
            if p.n_event >= self.max_events:
                logger.warning("Particle %d underwent maximum number of events (%d)",
                               p.id, self.max_events)
                p.alive = False
                p.fate = ParticleFate.MAX_EVENTS
                break

            d_boundary, surf_idx = self.geometry.distance_to_boundary(p.cell, p.r, p.u)
            if surf_idx < 0:
                raise TransportError("No boundary found ahead of particle", p.id, p.r)

            p.r_last = p.r.copy()
            p.u_last = p.u.copy()
            p.wgt_last = p.wgt
            p.E_last = p.E
            p.g_last = p.g
            p.n_event += 1

            if d_collision <= d_boundary:
                p.r = p.r + d_collision * p.u
                d_collision = self._collide(p, material)
                material = self._material(p)
            else:
                d_collision -= d_boundary
                p.r = p.r + d_boundary * p.u
                p.r_last_current = p.r.copy()
                if self._cross_surface(p, surf_idx):
                    material_new = self._material(p)
                    if material_new is not material:
                        material = material_new
                        d_collision = self._sample_collision_distance(p, material)

            p.record_track_state()

        return p.fate

    # --- Events ---

    def _collide(self, p, material) -> float:
        """Process a collision; return the next collision distance (inf if absorbed)."""
        p.n_collision += 1
        g = p.g
        sigma_t = material.total[g]
        sigma_a = material.absorption[g]
        self.tallies.score_collision(p.cell, g, p.wgt, sigma_t, sigma_a)

        if self.streams.prn() * sigma_t < sigma_a:
            p.alive = False
            p.fate = ParticleFate.ABSORBED
            logger.debug("Particle %d absorbed in cell %d group %d", p.id, p.cell, g)
            return math.inf

        p.g = material.sample_outgoing_group(g, self.streams.prn())
        if self.energy_groups is not None:
            p.E = self.energy_groups.energy_bin_average(p.g)
        p.u = self._sample_isotropic()
        return self._sample_collision_distance(p, material)

    def _cross_surface(self, p, surf_idx: int) -> bool:
        """Apply the boundary condition; return True if the particle changed cell."""
        surface = self.geometry.surfaces[surf_idx]
        bc = surface.boundary_condition

        if bc == BoundaryCondition.VACUUM:
            p.alive = False
            p.fate = ParticleFate.LEAKED
            logger.debug("Particle %d leaked through surface %d", p.id, surf_idx)
            return False

        if bc == BoundaryCondition.REFLECTIVE:
            n = surface.normal(p.r)
            u = p.u - 2.0 * np.dot(p.u, n) * n
            p.u = u / np.linalg.norm(u)
            p.r = p.r + BUMP_DISTANCE * p.u
            return False

        p.r = p.r + BUMP_DISTANCE * p.u
        cell = self.geometry.find_cell(p.r)
        if cell < 0:
            raise TransportError(f"Particle lost after crossing surface {surf_idx}", p.id, p.r)
        changed = cell != p.cell
        p.cell = cell
        return changed

    # --- Sampling ---

    def _material(self, p):
        return self.geometry.materials[self.geometry.cells[p.cell].material_index]

    def _sample_collision_distance(self, p, material) -> float:
        sigma_t = material.total[p.g]
        if sigma_t <= 0.0:
            raise TransportError(
                f"Non-positive total cross section in {material.name} group {p.g}", p.id, p.r)
        return -math.log(1.0 - self.streams.prn()) / sigma_t

    def _sample_isotropic(self) -> np.ndarray:
        """Sample a uniformly distributed direction on the unit sphere."""
        cos_theta = 2.0 * self.streams.prn() - 1.0
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
        phi = 2.0 * math.pi * self.streams.prn()
        return np.array([sin_theta * math.cos(phi),
                         sin_theta * math.sin(phi),
                         cos_theta])
