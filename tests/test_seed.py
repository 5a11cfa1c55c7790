"""Tests for particle stream seed derivation."""

import pytest

from openmc_restart.checkpoint import RestartContext
from openmc_restart.errors import UnknownRunModeError
from openmc_restart.seed import derive_seed
from openmc_restart.types import RunMode


def make_context(batch=3, gen_per_batch=5, gen=3, n=1000, previous=0):
    return RestartContext(current_batch=batch, generations_per_batch=gen_per_batch,
                          current_generation=gen, n_particles=n,
                          previous_generations=previous)


def test_fixed_source_seed_is_particle_id():
    assert derive_seed(RunMode.FIXED_SOURCE, make_context(), 42) == 42


@pytest.mark.parametrize("batch,gen_per_batch,gen,n", [
    (1, 1, 1, 10), (7, 3, 2, 500), (100, 10, 10, 1_000_000),
])
def test_fixed_source_ignores_context(batch, gen_per_batch, gen, n):
    ctx = make_context(batch=batch, gen_per_batch=gen_per_batch, gen=gen, n=n)
    assert derive_seed(RunMode.FIXED_SOURCE, ctx, 42) == 42


def test_eigenvalue_seed():
    # 10 generations elapsed before batch 3, generation 3 within it
    ctx = make_context(batch=3, gen_per_batch=5, gen=3, n=1000)
    assert ctx.generations_before_batch == 10
    assert derive_seed(RunMode.EIGENVALUE, ctx, 7) == (10 + 3 - 1) * 1000 + 7 == 12007


def test_eigenvalue_first_generation_equals_id():
    ctx = make_context(batch=1, gen_per_batch=1, gen=1, n=1000)
    assert derive_seed(RunMode.EIGENVALUE, ctx, 5) == 5


def test_eigenvalue_counts_previous_generations():
    ctx = make_context(batch=3, gen_per_batch=5, gen=3, n=1000, previous=4)
    assert derive_seed(RunMode.EIGENVALUE, ctx, 7) == (4 + 10 + 3 - 1) * 1000 + 7


def test_eigenvalue_seeds_unique_across_generations():
    seeds = set()
    for batch in range(1, 4):
        for gen in range(1, 3):
            ctx = make_context(batch=batch, gen_per_batch=2, gen=gen, n=10)
            for pid in range(1, 11):
                seeds.add(derive_seed(RunMode.EIGENVALUE, ctx, pid))
    assert len(seeds) == 3 * 2 * 10


def test_seed_is_deterministic():
    ctx = make_context()
    results = {derive_seed(RunMode.EIGENVALUE, ctx, 7) for _ in range(100)}
    assert results == {12007}


def test_seed_fits_in_64_bits():
    ctx = make_context(batch=2**40, gen_per_batch=2**10, gen=1, n=2**20)
    seed = derive_seed(RunMode.EIGENVALUE, ctx, 1)
    assert 0 <= seed < 2**64


@pytest.mark.parametrize("mode", ["eigenvalue", "volume", None, 1])
def test_unknown_run_mode(mode):
    with pytest.raises(UnknownRunModeError):
        derive_seed(mode, make_context(), 7)


def test_negative_previous_generations_rejected():
    with pytest.raises(ValueError):
        make_context(previous=-20)
