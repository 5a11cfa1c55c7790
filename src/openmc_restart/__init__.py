"""Deterministic single-particle restart and replay for Monte Carlo transport runs."""

from .checkpoint import CheckpointRecord, RestartContext, read_particle_restart, write_particle_restart
from .errors import RestartError, FormatError, UnknownRunModeError, TransportError
from .particle import Particle, reconstruct_particle
from .restart import ParticleRestart, RestartResult, build_restart, run_particle_restart
from .seed import derive_seed
from .settings import Settings
from .types import RunMode, ParticleType, ParticleFate, RestartPhase

__all__ = [
    "CheckpointRecord", "RestartContext", "read_particle_restart", "write_particle_restart",
    "RestartError", "FormatError", "UnknownRunModeError", "TransportError",
    "Particle", "reconstruct_particle",
    "ParticleRestart", "RestartResult", "build_restart", "run_particle_restart",
    "derive_seed", "Settings",
    "RunMode", "ParticleType", "ParticleFate", "RestartPhase",
]
