"""Tests for the LCG pseudorandom streams."""

import pytest

from openmc_restart.rng import (
    LCGStreams, future_seed, PRN_MULT, PRN_ADD, PRN_MASK, PRN_STRIDE,
    N_STREAMS, STREAM_TRACKING, STREAM_PHOTON,
)


def step(seed, n):
    for _ in range(n):
        seed = (PRN_MULT * seed + PRN_ADD) & PRN_MASK
    return seed


@pytest.mark.parametrize("n", [0, 1, 2, 17, 1000])
def test_future_seed_matches_stepping(n):
    assert future_seed(n, 12345) == step(12345, n)


def test_set_stream_seed_positions_stream():
    streams = LCGStreams(master_seed=1)
    streams.set_stream_seed(42)
    assert streams.seeds[STREAM_TRACKING] == future_seed(42 * PRN_STRIDE, 1)
    assert streams.seeds[STREAM_PHOTON] == future_seed(42 * PRN_STRIDE, 1 + STREAM_PHOTON)
    assert len(set(streams.seeds)) == N_STREAMS


def test_reseeding_reproduces_sequence():
    streams = LCGStreams()
    streams.set_stream_seed(12007)
    first = [streams.prn() for _ in range(10)]
    streams.set_stream_seed(12007)
    second = [streams.prn() for _ in range(10)]
    assert first == second
    assert streams.times_seeded == 2


def test_consecutive_particles_get_disjoint_windows():
    streams = LCGStreams()
    streams.set_stream_seed(1)
    start_1 = streams.seeds[STREAM_TRACKING]
    streams.set_stream_seed(2)
    assert streams.seeds[STREAM_TRACKING] == future_seed(PRN_STRIDE, start_1)


def test_prn_range():
    streams = LCGStreams()
    streams.set_stream_seed(99)
    values = [streams.prn() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_future_prn_does_not_advance():
    streams = LCGStreams()
    streams.set_stream_seed(5)
    peek = streams.future_prn(3)
    draws = [streams.prn() for _ in range(3)]
    assert peek == draws[-1]


def test_master_seed_changes_streams():
    a = LCGStreams(master_seed=1)
    b = LCGStreams(master_seed=2)
    a.set_stream_seed(10)
    b.set_stream_seed(10)
    assert a.prn() != b.prn()


def test_select_stream_out_of_range():
    with pytest.raises(ValueError):
        LCGStreams().select_stream(N_STREAMS)
