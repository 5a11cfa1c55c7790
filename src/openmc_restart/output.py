"""Console output for particle restart runs."""

import sys


def write_message(message: str, level: int, settings) -> None:
    """Print message if the run's verbosity is at least level."""
    if level <= settings.verbosity:
        print(f" {message}")


def print_particle(p, file=None) -> None:
    """Print the state of a particle, typically after its history ended."""
    out = file if file is not None else sys.stdout
    fate = p.fate.name.lower().replace("_", " ") if p.fate is not None else "alive"

    print("=" * 60, file=out)
    print(f"{p.type.name.capitalize()} {p.id}", file=out)
    print("=" * 60, file=out)
    print(f"  Fate:               {fate}", file=out)
    print(f"  Cell:               {p.cell}", file=out)
    print(f"  Position:           {p.r[0]:.8g} {p.r[1]:.8g} {p.r[2]:.8g}", file=out)
    print(f"  Direction:          {p.u[0]:.8g} {p.u[1]:.8g} {p.u[2]:.8g}", file=out)
    print(f"  Weight:             {p.wgt:.8g}", file=out)
    print(f"  Energy:             {p.E:.8g} eV", file=out)
    print(f"  Energy group:       {p.g}", file=out)
    print(f"  Events:             {p.n_event}", file=out)
    print(f"  Collisions:         {p.n_collision}", file=out)
    print("=" * 60, file=out)
