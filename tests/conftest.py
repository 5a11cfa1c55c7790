import h5py
import numpy as np
import pytest

# Batch 3 of 5-generation batches, generation 3: 10 generations precede the batch
DEFAULT_FIELDS = {
    "current_batch": np.int32(3),
    "generations_per_batch": np.int32(5),
    "current_generation": np.int32(3),
    "n_particles": np.int64(1000),
    "run_mode": np.bytes_("eigenvalue"),
    "id": np.int64(7),
    "type": np.int32(0),
    "weight": np.float64(1.0),
    "energy": np.float64(2.0e6),
    "xyz": np.array([0.63, 0.63, 0.5]),
    "uvw": np.array([1.0, 0.0, 0.0]),
}


@pytest.fixture
def restart_file(tmp_path):
    """Factory writing a particle restart file; override or omit datasets by name."""
    def _make(name="particle_7.h5", omit=(), filetype="particle restart", **overrides):
        fields = dict(DEFAULT_FIELDS)
        fields.update(overrides)
        path = tmp_path / name
        with h5py.File(path, "w") as f:
            if filetype is not None:
                f.attrs["filetype"] = np.bytes_(filetype)
            for key, value in fields.items():
                if key in omit:
                    continue
                f.create_dataset(key, data=value)
        return path
    return _make
