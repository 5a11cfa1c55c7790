"""
Enumerations and constants shared by the particle restart modules.

Integer values of ParticleType must match the tags production runs write
into particle restart files; the run mode strings likewise.
"""

from enum import Enum, IntEnum


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAX_EVENTS: int = 1_000_000
RESTART_VERBOSITY: int = 10
DEFAULT_VERBOSITY: int = 7

# Verbosity level at which each class of console message is shown
MSG_LOAD: int = 5
MSG_RESULT: int = 6

FILETYPE_PARTICLE_RESTART: str = "particle restart"
PARTICLE_RESTART_VERSION: tuple[int, int] = (2, 0)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class RunMode(Enum):
    """Run mode of the simulation that wrote the restart file."""
    EIGENVALUE   = "eigenvalue"
    FIXED_SOURCE = "fixed source"


class ParticleType(IntEnum):
    """Particle species tag stored in the restart file's 'type' dataset."""
    NEUTRON  = 0
    PHOTON   = 1
    ELECTRON = 2
    POSITRON = 3


class ParticleFate(IntEnum):
    """How a replayed history ended."""
    ABSORBED   = 0
    LEAKED     = 1
    MAX_EVENTS = 2


class SurfaceType(IntEnum):
    """Geometry surface types."""
    PLANE_X     = 0
    PLANE_Y     = 1
    PLANE_Z     = 2
    CYLINDER_Z  = 3
    SPHERE      = 4


class BoundaryCondition(IntEnum):
    """Boundary condition applied when a particle reaches a surface."""
    VACUUM          = 0
    REFLECTIVE      = 1
    TRANSMISSIVE    = 2  # Internal surface: particles pass through


class RestartPhase(IntEnum):
    """Replay driver state; transitions only move forward."""
    IDLE         = 0
    LOADED       = 1
    SEEDED       = 2
    TRANSPORTING = 3
    REPORTED     = 4
    ABORTED      = 5


# ---------------------------------------------------------------------------
# Restart file layout
# ---------------------------------------------------------------------------

# Production runs write the first name; the second is accepted as an alias
POSITION_DATASETS: tuple[str, ...] = ("xyz", "position")
DIRECTION_DATASETS: tuple[str, ...] = ("uvw", "direction")
