"""Tally store for collision-estimator scoring."""

import numpy as np


class Tally:
    """Per-(cell, group) flux and absorption accumulators.

    Flux uses the collision estimator: each collision scores wgt / sigma_t.
    """

    def __init__(self, name: str, num_cells: int, num_groups: int):
        self.name = name
        self.num_cells = num_cells
        self.num_groups = num_groups
        self.flux = np.zeros((num_cells, num_groups))
        self.absorption = np.zeros((num_cells, num_groups))
        self.n_scores = 0

    def score_collision(self, cell: int, group: int, wgt: float,
                        sigma_t: float, sigma_a: float):
        phi = wgt / sigma_t
        self.flux[cell, group] += phi
        self.absorption[cell, group] += phi * sigma_a
        self.n_scores += 1

    def reset(self):
        """Zero accumulated scores, keeping the tally defined."""
        self.flux[:] = 0.0
        self.absorption[:] = 0.0
        self.n_scores = 0


class TallyStore:
    """All tallies defined for the run."""

    def __init__(self, tallies: list[Tally] | None = None):
        self.tallies: list[Tally] = list(tallies) if tallies else []

    def add(self, tally: Tally) -> Tally:
        self.tallies.append(tally)
        return tally

    def clear(self):
        """Remove every tally; later collisions score nothing."""
        self.tallies = []

    def score_collision(self, cell: int, group: int, wgt: float,
                        sigma_t: float, sigma_a: float):
        for tally in self.tallies:
            tally.score_collision(cell, group, wgt, sigma_t, sigma_a)

    @property
    def total_scores(self) -> int:
        return sum(t.n_scores for t in self.tallies)

    def __len__(self) -> int:
        return len(self.tallies)

    def __iter__(self):
        return iter(self.tallies)
