"""Particle track files."""

import os

import h5py
import numpy as np


def track_filename(context, particle_id: int) -> str:
    return f"track_{context.current_batch}_{context.current_generation}_{particle_id}.h5"


def write_track(p, context, directory: str = ".") -> str:
    """Write the states recorded along a particle's history to HDF5.

    Returns:
        Path of the track file.
    """
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, track_filename(context, p.id))
    coords = np.array([state[0] for state in p.tracks], dtype=np.float64).reshape(-1, 3)
    energy = np.array([state[1] for state in p.tracks], dtype=np.float64)
    weight = np.array([state[2] for state in p.tracks], dtype=np.float64)

    with h5py.File(path, "w") as f:
        f.attrs["filetype"] = np.bytes_("track")
        f.attrs["id"] = p.id
        f.attrs["type"] = int(p.type)
        f.attrs["n_states"] = len(p.tracks)
        f.create_dataset("coordinates", data=coords)
        f.create_dataset("energy", data=energy)
        f.create_dataset("weight", data=weight)
    return path


def read_track(path) -> dict:
    """Load a track file written by write_track."""
    with h5py.File(os.fspath(path), "r") as f:
        return {
            "id": int(f.attrs["id"]),
            "coordinates": f["coordinates"][()],
            "energy": f["energy"][()],
            "weight": f["weight"][()],
        }
