"""Tests for multigroup data and pincell geometry."""

import math

import numpy as np
import pytest

from openmc_restart.geometry import Surface, build_c5g7_pincell
from openmc_restart.mgxs import EnergyGroups, NUM_GROUPS, material_uo2, material_moderator
from openmc_restart.types import BoundaryCondition


def test_energy_bin_average_high_to_low():
    groups = EnergyGroups([0.0, 1.0, 3.0])
    assert groups.num_groups == 2
    assert groups.energy_bin_average(0) == 2.0
    assert groups.energy_bin_average(1) == 0.5


def test_energy_bin_average_out_of_range():
    with pytest.raises(IndexError):
        EnergyGroups().energy_bin_average(NUM_GROUPS)


@pytest.mark.parametrize("energy,group", [(2.0e6, 0), (10.0, 1), (0.01, 6), (5.0e7, 0)])
def test_find_group(energy, group):
    assert EnergyGroups().find_group(energy) == group


def test_group_edges_must_ascend():
    with pytest.raises(ValueError):
        EnergyGroups([1.0, 0.5, 2.0])


def test_materials_have_seven_groups():
    uo2 = material_uo2()
    mod = material_moderator()
    assert uo2.num_groups == mod.num_groups == NUM_GROUPS
    assert uo2.fissionable
    assert not mod.fissionable
    assert np.all(uo2.absorption >= 0.0)
    np.testing.assert_allclose(uo2.scatter_cdf[:, -1], 1.0)


def test_sample_outgoing_group_no_upscatter_from_fast():
    uo2 = material_uo2()
    # Group 0 only scatters into groups 0-3
    for xi in np.linspace(0.0, 0.999999, 50):
        assert 0 <= uo2.sample_outgoing_group(0, xi) <= 3


def test_pincell_find_cell():
    geom = build_c5g7_pincell([material_uo2(), material_moderator()])
    assert geom.find_cell([0.63, 0.63, 0.5]) == 0
    assert geom.find_cell([0.05, 0.05, 0.5]) == 1
    assert geom.find_cell([2.0, 0.63, 0.5]) == -1


def test_plane_distance():
    s = Surface.plane_x(1.0)
    assert s.distance([0.0, 0.0, 0.0], [1.0, 0.0, 0.0]) == pytest.approx(1.0)
    assert s.distance([0.0, 0.0, 0.0], [-1.0, 0.0, 0.0]) == math.inf
    assert s.distance([0.0, 0.0, 0.0], [0.0, 1.0, 0.0]) == math.inf


def test_cylinder_distance_from_inside_and_outside():
    s = Surface.cylinder_z(0.0, 0.0, 1.0)
    assert s.distance([0.0, 0.0, 0.0], [1.0, 0.0, 0.0]) == pytest.approx(1.0)
    assert s.distance([-3.0, 0.0, 0.0], [1.0, 0.0, 0.0]) == pytest.approx(2.0)
    assert s.distance([0.0, 0.0, 0.0], [0.0, 0.0, 1.0]) == math.inf


def test_sphere_distance():
    s = Surface.sphere(0.0, 0.0, 0.0, 2.0)
    assert s.distance([0.0, 0.0, 0.0], [0.0, 0.0, 1.0]) == pytest.approx(2.0)


def test_pincell_distance_to_boundary():
    geom = build_c5g7_pincell([material_uo2(), material_moderator()],
                              outer_bc=BoundaryCondition.VACUUM)
    d, surf = geom.distance_to_boundary(0, [0.63, 0.63, 0.5], [1.0, 0.0, 0.0])
    assert surf == 6
    assert d == pytest.approx(0.54)
    assert geom.surfaces[0].boundary_condition == BoundaryCondition.VACUUM
