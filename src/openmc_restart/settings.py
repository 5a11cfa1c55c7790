"""Run configuration for a particle restart."""

from dataclasses import dataclass

from .types import DEFAULT_VERBOSITY, MAX_EVENTS


@dataclass
class Settings:
    """Options that come from the invoking context, not the restart file.

    run_ce selects continuous-energy (True) or multigroup (False) physics;
    it decides how the stored 'energy' dataset is interpreted.
    """
    path_particle_restart: str = ""
    verbosity: int = DEFAULT_VERBOSITY
    run_ce: bool = True
    write_all_tracks: bool = False
    track_dir: str = "."
    max_events: int = MAX_EVENTS
    seed: int = 1
    previous_generations: int = 0
    vacuum_boundary: bool = False
