"""Matplotlib chart generators for particle restart reports."""

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for PDF generation
import matplotlib.pyplot as plt
import numpy as np


# Consistent style
COLORS = plt.cm.Set2.colors
FIGURE_DPI = 150


def track_xy_chart(coordinates, output_path: str, geometry=None,
                   title: str = 'Particle Track') -> str:
    """Line plot of a particle track projected on the x-y plane.

    Cylinder surfaces of the geometry, if given, are drawn as circles and
    x/y planes as lines so the track can be read against the model.
    """
    coords = np.asarray(coordinates, dtype=np.float64).reshape(-1, 3)

    fig, ax = plt.subplots(figsize=(7, 7))

    if geometry is not None:
        _draw_geometry_xy(ax, geometry)

    ax.plot(coords[:, 0], coords[:, 1], '-', color=COLORS[0], linewidth=1.0)
    ax.plot(coords[:, 0], coords[:, 1], '.', color=COLORS[1], markersize=3)
    if len(coords) > 0:
        ax.plot(coords[0, 0], coords[0, 1], 'o', color='green', label='Start')
        ax.plot(coords[-1, 0], coords[-1, 1], 'x', color='red', markersize=9, label='End')
        ax.legend(fontsize=9, loc='upper right')

    ax.set_xlabel('x (cm)', fontsize=12)
    ax.set_ylabel('y (cm)', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_path, dpi=FIGURE_DPI, bbox_inches='tight')
    plt.close()
    return output_path


def energy_history_chart(energies, output_path: str) -> str:
    """Step plot of particle energy after each event (log scale)."""
    energies = np.asarray(energies, dtype=np.float64)

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.step(np.arange(len(energies)), energies, where='post', color=COLORS[2], linewidth=1.5)
    if np.all(energies > 0.0) and len(energies) > 0:
        ax.set_yscale('log')
    ax.set_xlabel('Event', fontsize=12)
    ax.set_ylabel('Energy (eV)', fontsize=12)
    ax.set_title('Energy History', fontsize=14, fontweight='bold')
    ax.grid(alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_path, dpi=FIGURE_DPI, bbox_inches='tight')
    plt.close()
    return output_path


def _draw_geometry_xy(ax, geometry):
    from matplotlib.patches import Circle
    from ..types import SurfaceType

    for surface in geometry.surfaces:
        c = surface.coefficients
        if surface.type == SurfaceType.CYLINDER_Z:
            ax.add_patch(Circle((c[0], c[1]), c[2], fill=False,
                                edgecolor='black', linewidth=1.0))
        elif surface.type == SurfaceType.PLANE_X:
            ax.axvline(c[0], color='black', linewidth=1.0)
        elif surface.type == SurfaceType.PLANE_Y:
            ax.axhline(c[1], color='black', linewidth=1.0)
