"""Particle restart driver.

Replays one particle from a particle restart file:

    IDLE -> LOADED -> SEEDED -> TRANSPORTING -> REPORTED

Any exception moves the driver to ABORTED and propagates unchanged; nothing
is retried, since the failure being reproduced is the point of the run.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from .checkpoint import CheckpointRecord, read_particle_restart
from .geometry import build_c5g7_pincell
from .mgxs import EnergyGroups, material_uo2, material_moderator
from .output import write_message, print_particle
from .particle import Particle, reconstruct_particle
from .rng import LCGStreams
from .seed import derive_seed
from .settings import Settings
from .tally import TallyStore, Tally
from .track import write_track
from .transport import TransportEngine
from .types import (
    BoundaryCondition, ParticleFate, RestartPhase,
    RESTART_VERBOSITY, MSG_LOAD, MSG_RESULT,
)

logger = logging.getLogger(__name__)


class Transporter(Protocol):
    def transport(self, particle: Particle) -> ParticleFate: ...


class EnergyTable(Protocol):
    num_groups: int

    def energy_bin_average(self, group: int) -> float: ...


class StreamSeeder(Protocol):
    def set_stream_seed(self, seed: int) -> None: ...


class Clearable(Protocol):
    def clear(self) -> None: ...


@dataclass
class RestartResult:
    record: CheckpointRecord
    particle: Particle
    seed: int
    fate: ParticleFate
    track_path: str | None = None


class ParticleRestart:
    """Drives a single replay; each instance runs once."""

    def __init__(self, settings: Settings, engine: Transporter,
                 streams: StreamSeeder, tallies: Clearable,
                 energy_table: EnergyTable | None = None,
                 report: Callable[[Particle], None] = print_particle):
        self.settings = settings
        self.engine = engine
        self.streams = streams
        self.tallies = tallies
        self.energy_table = energy_table
        self.report = report
        self.phase = RestartPhase.IDLE

    def run(self) -> RestartResult:
        if self.phase != RestartPhase.IDLE:
            raise RuntimeError(f"Particle restart already ran (phase {self.phase.name})")
        try:
            return self._run()
        except Exception:
            logger.debug("Particle restart aborted in phase %s", self.phase.name)
            self.phase = RestartPhase.ABORTED
            raise

    def _run(self) -> RestartResult:
        settings = self.settings
        settings.verbosity = RESTART_VERBOSITY

        write_message(f"Loading particle restart file {settings.path_particle_restart}...",
                      MSG_LOAD, settings)
        record = read_particle_restart(settings.path_particle_restart,
                                       previous_generations=settings.previous_generations)
        particle = reconstruct_particle(record, settings.run_ce, self.energy_table)
        self.phase = RestartPhase.LOADED

        # Only the trajectory matters here, not scores
        self.tallies.clear()

        if settings.write_all_tracks:
            particle.write_track = True

        seed = derive_seed(record.run_mode, record.context, record.id)
        self.streams.set_stream_seed(seed)
        self.phase = RestartPhase.SEEDED
        write_message(f"Particle {record.id} ({record.run_mode.value}) seeded with {seed}",
                      MSG_RESULT, settings)

        self.phase = RestartPhase.TRANSPORTING
        fate = self.engine.transport(particle)

        self.report(particle)
        track_path = None
        if particle.write_track:
            track_path = write_track(particle, record.context, settings.track_dir)
            write_message(f"Track written to {track_path}", MSG_RESULT, settings)
        self.phase = RestartPhase.REPORTED

        return RestartResult(record=record, particle=particle, seed=seed,
                             fate=fate, track_path=track_path)


def build_restart(settings: Settings, streams=None, report=print_particle):
    """Assemble a ParticleRestart around the C5G7 pincell transport engine.

    Without streams a fresh LCGStreams at settings.seed is created; a
    generator passed in is used as it is.

    Returns:
        (ParticleRestart, TransportEngine)
    """
    if streams is None:
        streams = LCGStreams(settings.seed)

    groups = EnergyGroups()
    outer_bc = BoundaryCondition.VACUUM if settings.vacuum_boundary else BoundaryCondition.REFLECTIVE
    geometry = build_c5g7_pincell([material_uo2(), material_moderator()], outer_bc=outer_bc)
    tallies = TallyStore([Tally("flux", len(geometry.cells), groups.num_groups)])
    engine = TransportEngine(geometry, tallies=tallies, streams=streams,
                             energy_groups=groups, max_events=settings.max_events)

    driver = ParticleRestart(settings, engine, streams, tallies,
                             energy_table=groups, report=report)
    return driver, engine


def run_particle_restart(settings: Settings) -> RestartResult:
    """Replay the particle in settings.path_particle_restart."""
    driver, _engine = build_restart(settings)
    return driver.run()
