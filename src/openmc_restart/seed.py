"""Pseudorandom stream seed a particle was given in its original run."""

from .errors import UnknownRunModeError
from .rng import UINT64_MASK
from .types import RunMode


def derive_seed(run_mode: RunMode, context, particle_id: int) -> int:
    """Return the 64-bit stream seed for a particle.

    Eigenvalue runs number particle histories consecutively across every
    generation simulated so far, so the seed is offset by all generations
    before the particle's own. Fixed-source runs give each particle the
    stream matching its id.

    Args:
        run_mode: Run mode of the original run.
        context: RestartContext captured at the particle's birth.
        particle_id: The particle's id (1-based).
    Returns:
        Unsigned 64-bit seed.
    """
    if run_mode is RunMode.EIGENVALUE:
        generation = context.previous_generations + context.overall_generation
        seed = (generation - 1) * context.n_particles + particle_id
    elif run_mode is RunMode.FIXED_SOURCE:
        seed = particle_id
    else:
        raise UnknownRunModeError(run_mode)
    return seed & UINT64_MASK
