"""Particle restart file I/O.

A particle restart file is an HDF5 file of scalar datasets describing where
in the run the particle was born, plus its physical state:

    current_batch, generations_per_batch, current_generation, n_particles,
    run_mode, id, type, weight, energy, xyz, uvw

Reading is all-or-nothing: a CheckpointRecord is only returned once every
dataset has been read and validated.
"""

import logging
import os
from dataclasses import dataclass

import h5py
import numpy as np

from .errors import FormatError, UnknownRunModeError
from .types import (
    RunMode, ParticleType,
    FILETYPE_PARTICLE_RESTART, PARTICLE_RESTART_VERSION,
    POSITION_DATASETS, DIRECTION_DATASETS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestartContext:
    """Snapshot of the simulation counters at the particle's birth."""
    current_batch: int
    generations_per_batch: int
    current_generation: int
    n_particles: int
    previous_generations: int = 0

    def __post_init__(self):
        if self.previous_generations < 0:
            raise ValueError(
                f"previous_generations must be non-negative, got {self.previous_generations}")

    @property
    def overall_generation(self) -> int:
        """1-based generation counter across all batches of the run."""
        return self.generations_per_batch * (self.current_batch - 1) + self.current_generation

    @property
    def generations_before_batch(self) -> int:
        """Generations completed before the current batch started."""
        return self.previous_generations + self.generations_per_batch * (self.current_batch - 1)


@dataclass(frozen=True)
class CheckpointRecord:
    """Everything a particle restart file holds."""
    context: RestartContext
    run_mode: RunMode
    id: int
    type: ParticleType
    weight: float
    energy: float | int
    position: tuple[float, float, float]
    direction: tuple[float, float, float]


def parse_run_mode(tag) -> RunMode:
    """Map the stored run mode string onto RunMode; anything else is an error."""
    if isinstance(tag, bytes):
        tag = tag.decode("utf-8", errors="replace")
    if isinstance(tag, str):
        for mode in RunMode:
            if tag == mode.value:
                return mode
    raise UnknownRunModeError(tag)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def read_particle_restart(path, previous_generations: int = 0) -> CheckpointRecord:
    """Load and validate a particle restart file.

    Args:
        path: Particle restart HDF5 file.
        previous_generations: Generations completed by any run the original
            run was itself restarted from (not stored in the file).
    Returns:
        CheckpointRecord.
    Raises:
        FileNotFoundError: path does not exist.
        FormatError: a dataset is missing, mistyped or out of range.
        UnknownRunModeError: run_mode is not a recognised tag.
    """
    path = os.fspath(path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Particle restart file not found: {path}")

    try:
        f = h5py.File(path, "r")
    except OSError as e:
        raise FormatError("<file>", f"{path} is not a readable HDF5 file ({e})") from e

    with f:
        _check_filetype(f)

        current_batch = _read_int(f, "current_batch", minimum=1)
        gen_per_batch = _read_int(f, "generations_per_batch", minimum=1)
        current_gen = _read_int(f, "current_generation", minimum=1)
        if current_gen > gen_per_batch:
            raise FormatError("current_generation",
                              f"{current_gen} exceeds generations_per_batch ({gen_per_batch})")
        n_particles = _read_int(f, "n_particles", minimum=1)

        run_mode = parse_run_mode(_read_string(f, "run_mode"))

        particle_id = _read_int(f, "id", minimum=1)
        type_tag = _read_int(f, "type")
        try:
            particle_type = ParticleType(type_tag)
        except ValueError:
            raise FormatError("type", f"unknown particle type {type_tag}") from None
        weight = _read_float(f, "weight")
        energy = _read_number(f, "energy")
        position = _read_vector(f, POSITION_DATASETS)
        direction = _read_vector(f, DIRECTION_DATASETS)

    logger.debug("Read particle %d (%s) from %s", particle_id, run_mode.value, path)

    return CheckpointRecord(
        context=RestartContext(
            current_batch=current_batch,
            generations_per_batch=gen_per_batch,
            current_generation=current_gen,
            n_particles=n_particles,
            previous_generations=previous_generations,
        ),
        run_mode=run_mode,
        id=particle_id,
        type=particle_type,
        weight=weight,
        energy=energy,
        position=position,
        direction=direction,
    )


def _check_filetype(f):
    if "filetype" not in f.attrs:
        return
    filetype = f.attrs["filetype"]
    if isinstance(filetype, np.ndarray) and filetype.size == 1:
        filetype = filetype.item()
    if isinstance(filetype, bytes):
        filetype = filetype.decode("utf-8", errors="replace")
    if filetype != FILETYPE_PARTICLE_RESTART:
        raise FormatError("filetype", f"expected '{FILETYPE_PARTICLE_RESTART}', got {filetype!r}")


def _dataset(f, name: str) -> h5py.Dataset:
    if name not in f:
        raise FormatError(name, "missing")
    obj = f[name]
    if not isinstance(obj, h5py.Dataset):
        raise FormatError(name, "expected a dataset, found a group")
    return obj


def _scalar(dset, name: str):
    if dset.shape not in ((), (1,)):
        raise FormatError(name, f"expected a scalar, got shape {dset.shape}")
    value = dset[()]
    if isinstance(value, np.ndarray):
        value = value[0]
    return value


def _read_int(f, name: str, minimum: int | None = None) -> int:
    dset = _dataset(f, name)
    if dset.dtype.kind not in "iu":
        raise FormatError(name, f"expected an integer, got dtype {dset.dtype}")
    value = int(_scalar(dset, name))
    if minimum is not None and value < minimum:
        raise FormatError(name, f"must be >= {minimum}, got {value}")
    return value


def _read_float(f, name: str) -> float:
    dset = _dataset(f, name)
    if dset.dtype.kind not in "iuf":
        raise FormatError(name, f"expected a number, got dtype {dset.dtype}")
    return float(_scalar(dset, name))


def _read_number(f, name: str) -> float | int:
    """Read a float or an integer, keeping whichever was stored."""
    dset = _dataset(f, name)
    kind = dset.dtype.kind
    if kind == "f":
        return float(_scalar(dset, name))
    if kind in "iu":
        return int(_scalar(dset, name))
    raise FormatError(name, f"expected a number, got dtype {dset.dtype}")


def _read_string(f, name: str) -> str:
    dset = _dataset(f, name)
    if h5py.check_string_dtype(dset.dtype) is None and dset.dtype.kind != "S":
        raise FormatError(name, f"expected a string, got dtype {dset.dtype}")
    value = _scalar(dset, name)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    return str(value)


def _read_vector(f, names: tuple[str, ...]) -> tuple[float, float, float]:
    name = next((n for n in names if n in f), names[0])
    dset = _dataset(f, name)
    if dset.dtype.kind not in "iuf":
        raise FormatError(name, f"expected a numeric 3-vector, got dtype {dset.dtype}")
    if dset.shape != (3,):
        raise FormatError(name, f"expected shape (3,), got {dset.shape}")
    x, y, z = (float(v) for v in dset[()])
    return (x, y, z)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def write_particle_restart(path, record: CheckpointRecord):
    """Write a particle restart file in the layout read_particle_restart expects."""
    ctx = record.context
    with h5py.File(os.fspath(path), "w") as f:
        f.attrs["filetype"] = np.bytes_(FILETYPE_PARTICLE_RESTART)
        f.attrs["version"] = np.array(PARTICLE_RESTART_VERSION, dtype=np.int32)

        f.create_dataset("current_batch", data=np.int32(ctx.current_batch))
        f.create_dataset("generations_per_batch", data=np.int32(ctx.generations_per_batch))
        f.create_dataset("current_generation", data=np.int32(ctx.current_generation))
        f.create_dataset("n_particles", data=np.int64(ctx.n_particles))
        f.create_dataset("run_mode", data=np.bytes_(record.run_mode.value))
        f.create_dataset("id", data=np.int64(record.id))
        f.create_dataset("type", data=np.int32(int(record.type)))
        f.create_dataset("weight", data=np.float64(record.weight))
        if isinstance(record.energy, (int, np.integer)):
            f.create_dataset("energy", data=np.int32(record.energy))
        else:
            f.create_dataset("energy", data=np.float64(record.energy))
        f.create_dataset("xyz", data=np.asarray(record.position, dtype=np.float64))
        f.create_dataset("uvw", data=np.asarray(record.direction, dtype=np.float64))
