"""Multigroup energy structure and C5G7 7-group cross sections.

Groups are indexed from the highest energy (group 0) downwards, the order
multigroup libraries and restart files use.
"""

import numpy as np

# C5G7 group boundaries in eV, ascending
C5G7_GROUP_EDGES = (0.0, 0.058, 0.14, 0.28, 0.625, 4.0, 5.53e3, 20.0e6)
NUM_GROUPS: int = 7


class EnergyGroups:
    """Energy group structure with tabulated bin averages."""

    def __init__(self, edges=C5G7_GROUP_EDGES):
        edges = np.asarray(edges, dtype=np.float64)
        if edges.ndim != 1 or edges.size < 2:
            raise ValueError("Energy group structure needs at least two edges")
        if np.any(np.diff(edges) <= 0.0):
            raise ValueError("Energy group edges must be strictly ascending")
        self.edges = edges
        # Stored high to low so index 0 is the fastest group
        self.energy_bin_avg = (0.5 * (edges[1:] + edges[:-1]))[::-1].copy()

    @property
    def num_groups(self) -> int:
        return self.energy_bin_avg.size

    def energy_bin_average(self, group: int) -> float:
        """Average energy (eV) of the given group."""
        if not 0 <= group < self.num_groups:
            raise IndexError(f"Energy group {group} out of range [0, {self.num_groups})")
        return float(self.energy_bin_avg[group])

    def find_group(self, energy: float) -> int:
        """Group index containing a continuous energy; clamps to the table ends."""
        i = int(np.searchsorted(self.edges, energy, side="right")) - 1
        i = min(max(i, 0), self.num_groups - 1)
        return self.num_groups - 1 - i


class Material:
    """Macroscopic multigroup cross sections for one material (1/cm)."""

    def __init__(self, name: str, total, scatter, fission=None, nu_fission=None, chi=None):
        self.name = name
        self.total = np.asarray(total, dtype=np.float64)
        g = self.total.size
        # scatter[from_g, to_g]
        self.scatter = np.asarray(scatter, dtype=np.float64).reshape(g, g)
        zeros = np.zeros(g)
        self.fission = np.asarray(fission if fission is not None else zeros, dtype=np.float64)
        self.nu_fission = np.asarray(nu_fission if nu_fission is not None else zeros, dtype=np.float64)
        self.chi = np.asarray(chi if chi is not None else zeros, dtype=np.float64)

        self.scatter_total = self.scatter.sum(axis=1)
        self.absorption = np.maximum(self.total - self.scatter_total, 0.0)
        row_sums = np.where(self.scatter_total > 0.0, self.scatter_total, 1.0)
        self.scatter_cdf = np.cumsum(self.scatter / row_sums[:, None], axis=1)
        self.scatter_cdf[:, -1] = 1.0

    @property
    def num_groups(self) -> int:
        return self.total.size

    @property
    def fissionable(self) -> bool:
        return bool(np.any(self.fission > 0.0))

    def sample_outgoing_group(self, group: int, xi: float) -> int:
        """Sample the post-scatter group from the scattering matrix row."""
        i = int(np.searchsorted(self.scatter_cdf[group], xi, side="right"))
        return min(i, self.num_groups - 1)


def material_uo2() -> Material:
    return Material(
        "UO2",
        total=[1.77949e-1, 3.29805e-1, 4.80388e-1, 5.54367e-1,
               3.11801e-1, 3.95168e-1, 5.64406e-1],
        scatter=[
            [1.27537e-1, 4.23780e-2, 9.43740e-6, 5.51630e-9, 0.0, 0.0, 0.0],
            [0.0, 3.24456e-1, 1.63140e-3, 3.14270e-9, 0.0, 0.0, 0.0],
            [0.0, 0.0, 4.50940e-1, 2.67920e-3, 0.0, 0.0, 0.0],
            [0.0, 0.0, 0.0, 4.52565e-1, 5.56640e-3, 0.0, 0.0],
            [0.0, 0.0, 0.0, 1.25250e-4, 2.71401e-1, 1.02550e-2, 1.00210e-8],
            [0.0, 0.0, 0.0, 0.0, 1.29680e-3, 2.65802e-1, 1.68090e-2],
            [0.0, 0.0, 0.0, 0.0, 0.0, 8.54580e-3, 2.73080e-1],
        ],
        fission=[7.21206e-3, 8.19301e-4, 6.45320e-3, 1.85648e-2,
                 1.78084e-2, 8.30348e-2, 2.16004e-1],
        nu_fission=[2.005998e-2, 2.027303e-3, 1.570599e-2, 4.518301e-2,
                    4.334208e-2, 2.020901e-1, 5.257105e-1],
        chi=[5.87910e-1, 4.11760e-1, 3.39060e-4, 1.17610e-7, 0.0, 0.0, 0.0],
    )


def material_moderator() -> Material:
    return Material(
        "moderator",
        total=[1.59206e-1, 4.12970e-1, 5.90310e-1, 5.84350e-1,
               7.18000e-1, 1.25445e+0, 2.65038e+0],
        scatter=[
            [4.44777e-2, 1.13400e-1, 7.23470e-4, 3.74990e-6, 5.31840e-8, 0.0, 0.0],
            [0.0, 2.82334e-1, 1.29940e-1, 6.23400e-4, 4.80020e-5, 7.44860e-6, 1.04550e-6],
            [0.0, 0.0, 3.45256e-1, 2.24570e-1, 1.69990e-2, 2.64430e-3, 5.03440e-4],
            [0.0, 0.0, 0.0, 9.10284e-2, 4.15510e-1, 6.37320e-2, 1.21390e-2],
            [0.0, 0.0, 0.0, 7.14370e-5, 1.39138e-1, 5.11820e-1, 6.12290e-2],
            [0.0, 0.0, 0.0, 0.0, 2.21570e-3, 6.99913e-1, 5.37320e-1],
            [0.0, 0.0, 0.0, 0.0, 0.0, 1.32440e-1, 2.48070e+0],
        ],
    )
