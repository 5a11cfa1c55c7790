"""63-bit linear congruential pseudorandom streams with skip-ahead.

Every particle history owns a disjoint window of the sequence: its starting
seed is the master seed advanced by seed * PRN_STRIDE draws.
"""

PRN_MULT: int = 2806196910506780709
PRN_ADD: int = 1
PRN_MOD: int = 1 << 63
PRN_MASK: int = PRN_MOD - 1
PRN_STRIDE: int = 152917
PRN_NORM: float = 1.0 / PRN_MOD

STREAM_TRACKING: int = 0
STREAM_TALLIES: int = 1
STREAM_SOURCE: int = 2
STREAM_URR_PTABLE: int = 3
STREAM_VOLUME: int = 4
STREAM_PHOTON: int = 5
N_STREAMS: int = 6

UINT64_MASK: int = (1 << 64) - 1


def future_seed(n: int, seed: int) -> int:
    """Return the seed reached after n LCG steps from seed, in O(log n).

    Uses the Brown (1994) arbitrary-stride algorithm.
    """
    g = PRN_MULT
    c = PRN_ADD
    g_new = 1
    c_new = 0
    n &= PRN_MASK
    while n > 0:
        if n & 1:
            g_new = (g_new * g) & PRN_MASK
            c_new = (c_new * g + c) & PRN_MASK
        c = (c * (g + 1)) & PRN_MASK
        g = (g * g) & PRN_MASK
        n >>= 1
    return (g_new * seed + c_new) & PRN_MASK


class LCGStreams:
    """Process-wide set of pseudorandom streams, one per consumer."""

    def __init__(self, master_seed: int = 1) -> None:
        self.set_master_seed(master_seed)
        self.times_seeded = 0

    def set_master_seed(self, master_seed: int) -> None:
        """Change the run's master seed; streams restart from it."""
        self.master_seed = master_seed & PRN_MASK
        self.seeds = [(self.master_seed + i) & PRN_MASK for i in range(N_STREAMS)]
        self.stream = STREAM_TRACKING

    def set_stream_seed(self, seed: int) -> None:
        """Position every stream at the start of the history for seed."""
        seed &= UINT64_MASK
        for i in range(N_STREAMS):
            self.seeds[i] = future_seed(seed * PRN_STRIDE, self.master_seed + i)
        self.stream = STREAM_TRACKING
        self.times_seeded += 1

    def prn(self) -> float:
        """Draw a uniform number in [0, 1) from the active stream."""
        s = (PRN_MULT * self.seeds[self.stream] + PRN_ADD) & PRN_MASK
        self.seeds[self.stream] = s
        return s * PRN_NORM

    def future_prn(self, n: int) -> float:
        """Peek the n-th number ahead on the active stream without advancing."""
        return future_seed(n, self.seeds[self.stream]) * PRN_NORM

    def select_stream(self, stream: int) -> None:
        if not 0 <= stream < N_STREAMS:
            raise ValueError(f"Stream index {stream} out of range [0, {N_STREAMS})")
        self.stream = stream


# Shared generator the transport engine draws from
default_streams = LCGStreams()


def set_stream_seed(seed: int) -> None:
    default_streams.set_stream_seed(seed)
