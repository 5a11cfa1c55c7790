"""Tests for reconstructing a particle from a restart record."""

import numpy as np
import pytest

from openmc_restart.checkpoint import CheckpointRecord, RestartContext
from openmc_restart.errors import FormatError
from openmc_restart.mgxs import EnergyGroups
from openmc_restart.particle import reconstruct_particle
from openmc_restart.types import RunMode, ParticleType


def make_record(energy=2.0e6, **kwargs):
    fields = dict(
        context=RestartContext(3, 5, 3, 1000),
        run_mode=RunMode.EIGENVALUE,
        id=7,
        type=ParticleType.NEUTRON,
        weight=0.75,
        energy=energy,
        position=(0.5, 0.6, 0.7),
        direction=(0.0, 0.6, 0.8),
    )
    fields.update(kwargs)
    return CheckpointRecord(**fields)


def assert_last_state_primed(p):
    assert p.wgt_last == p.wgt
    assert p.E_last == p.E
    assert p.g_last == p.g
    np.testing.assert_array_equal(p.r_last, p.r)
    np.testing.assert_array_equal(p.r_last_current, p.r)
    np.testing.assert_array_equal(p.u_last, p.u)


def test_continuous_energy_reconstruction():
    p = reconstruct_particle(make_record(), run_ce=True)

    assert p.id == 7
    assert p.type is ParticleType.NEUTRON
    assert p.wgt == 0.75
    assert p.E == 2.0e6
    np.testing.assert_array_equal(p.r, [0.5, 0.6, 0.7])
    np.testing.assert_array_equal(p.u, [0.0, 0.6, 0.8])
    assert p.alive
    assert_last_state_primed(p)


def test_multigroup_energy_is_group_average():
    groups = EnergyGroups()
    p = reconstruct_particle(make_record(energy=3), run_ce=False, energy_table=groups)

    assert p.g == 3
    assert p.E == groups.energy_bin_average(3)
    assert p.E != 3.0
    assert_last_state_primed(p)


def test_multigroup_accepts_integral_float():
    groups = EnergyGroups()
    p = reconstruct_particle(make_record(energy=5.0), run_ce=False, energy_table=groups)
    assert p.g == 5
    assert p.E == groups.energy_bin_average(5)


@pytest.mark.parametrize("stored", [2.5, -1, 7, 100])
def test_multigroup_rejects_bad_group(stored):
    with pytest.raises(FormatError) as excinfo:
        reconstruct_particle(make_record(energy=stored), run_ce=False,
                             energy_table=EnergyGroups())
    assert excinfo.value.field == "energy"


def test_multigroup_uses_table_lookup():
    class Table:
        num_groups = 4
        calls = []

        def energy_bin_average(self, group):
            self.calls.append(group)
            return 1000.0 + group

    table = Table()
    p = reconstruct_particle(make_record(energy=2), run_ce=False, energy_table=table)
    assert table.calls == [2]
    assert p.E == 1002.0


def test_last_state_arrays_are_copies():
    p = reconstruct_particle(make_record(), run_ce=True)
    p.r += 1.0
    p.u[0] = 1.0
    np.testing.assert_array_equal(p.r_last, [0.5, 0.6, 0.7])
    np.testing.assert_array_equal(p.r_last_current, [0.5, 0.6, 0.7])
    np.testing.assert_array_equal(p.u_last, [0.0, 0.6, 0.8])
