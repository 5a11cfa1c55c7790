"""Constructive solid geometry for single-particle replay.

Cells are intersections of surface half-spaces. A point is on the positive
side of a surface when Surface.evaluate() > 0.
"""

import math

import numpy as np

from .types import SurfaceType, BoundaryCondition

# Coincidence tolerance for distance calculations
FP_COINCIDENT: float = 1.0e-12
# Small push past a surface after crossing it
BUMP_DISTANCE: float = 1.0e-8


class Surface:
    """A geometric surface definition."""

    def __init__(self, surface_type: int, boundary_condition: int,
                 coefficients: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)):
        self.id = 0
        self.type = SurfaceType(surface_type)
        self.boundary_condition = BoundaryCondition(boundary_condition)
        self.coefficients = coefficients

    @classmethod
    def plane_x(cls, position: float, bc: int = BoundaryCondition.VACUUM) -> 'Surface':
        return cls(SurfaceType.PLANE_X, bc, (position, 0.0, 0.0, 0.0))

    @classmethod
    def plane_y(cls, position: float, bc: int = BoundaryCondition.VACUUM) -> 'Surface':
        return cls(SurfaceType.PLANE_Y, bc, (0.0, position, 0.0, 0.0))

    @classmethod
    def plane_z(cls, position: float, bc: int = BoundaryCondition.VACUUM) -> 'Surface':
        return cls(SurfaceType.PLANE_Z, bc, (0.0, 0.0, position, 0.0))

    @classmethod
    def cylinder_z(cls, x0: float, y0: float, radius: float,
                   bc: int = BoundaryCondition.VACUUM) -> 'Surface':
        return cls(SurfaceType.CYLINDER_Z, bc, (x0, y0, radius, 0.0))

    @classmethod
    def sphere(cls, x0: float, y0: float, z0: float, radius: float,
               bc: int = BoundaryCondition.VACUUM) -> 'Surface':
        return cls(SurfaceType.SPHERE, bc, (x0, y0, z0, radius))

    def evaluate(self, r) -> float:
        c = self.coefficients
        if self.type <= SurfaceType.PLANE_Z:
            axis = int(self.type)
            return r[axis] - c[axis]
        if self.type == SurfaceType.CYLINDER_Z:
            dx = r[0] - c[0]
            dy = r[1] - c[1]
            return dx * dx + dy * dy - c[2] * c[2]
        dx = r[0] - c[0]
        dy = r[1] - c[1]
        dz = r[2] - c[2]
        return dx * dx + dy * dy + dz * dz - c[3] * c[3]

    def distance(self, r, u) -> float:
        """Distance along u to the surface, or infinity if it is never reached."""
        c = self.coefficients
        if self.type <= SurfaceType.PLANE_Z:
            axis = int(self.type)
            if abs(u[axis]) < FP_COINCIDENT:
                return math.inf
            d = (c[axis] - r[axis]) / u[axis]
            return d if d > FP_COINCIDENT else math.inf

        if self.type == SurfaceType.CYLINDER_Z:
            dx = r[0] - c[0]
            dy = r[1] - c[1]
            a = u[0] * u[0] + u[1] * u[1]
            b = dx * u[0] + dy * u[1]
            k = dx * dx + dy * dy - c[2] * c[2]
        else:
            dx = r[0] - c[0]
            dy = r[1] - c[1]
            dz = r[2] - c[2]
            a = 1.0
            b = dx * u[0] + dy * u[1] + dz * u[2]
            k = dx * dx + dy * dy + dz * dz - c[3] * c[3]

        if a < FP_COINCIDENT:
            return math.inf
        quad = b * b - a * k
        if quad < 0.0:
            return math.inf
        sqrt_quad = math.sqrt(quad)
        t1 = (-b - sqrt_quad) / a
        t2 = (-b + sqrt_quad) / a
        if t1 > FP_COINCIDENT:
            return t1
        if t2 > FP_COINCIDENT:
            return t2
        return math.inf

    def normal(self, r) -> np.ndarray:
        """Unit gradient of the surface at r (points to the positive side)."""
        c = self.coefficients
        if self.type <= SurfaceType.PLANE_Z:
            n = np.zeros(3)
            n[int(self.type)] = 1.0
            return n
        if self.type == SurfaceType.CYLINDER_Z:
            n = np.array([r[0] - c[0], r[1] - c[1], 0.0])
        else:
            n = np.array([r[0] - c[0], r[1] - c[1], r[2] - c[2]])
        mag = np.linalg.norm(n)
        if mag < FP_COINCIDENT:
            return np.array([1.0, 0.0, 0.0])
        return n / mag


class Cell:
    """A geometric cell (region) definition."""

    def __init__(self, material_index: int,
                 surfaces: list[tuple[int, int]], name: str = ""):
        """
        Args:
            material_index: Index into the geometry's material list.
            surfaces: List of (surface_index, sense) tuples.
                sense is +1 (positive half-space) or -1 (negative half-space).
        """
        self.material_index = material_index
        self.surfaces = surfaces
        self.name = name

    def contains(self, r, all_surfaces: list[Surface]) -> bool:
        for surf_idx, sense in self.surfaces:
            value = all_surfaces[surf_idx].evaluate(r)
            if (value > 0.0) != (sense > 0):
                return False
        return True


class Geometry:
    """Surfaces, cells and the materials the cells reference."""

    def __init__(self, surfaces: list[Surface], cells: list[Cell], materials: list):
        self.surfaces = surfaces
        self.cells = cells
        self.materials = materials
        for i, s in enumerate(self.surfaces):
            s.id = i

    def find_cell(self, r) -> int:
        """Index of the cell containing r, or -1 if r is outside the model."""
        for i, cell in enumerate(self.cells):
            if cell.contains(r, self.surfaces):
                return i
        return -1

    def distance_to_boundary(self, cell_index: int, r, u) -> tuple[float, int]:
        """Nearest bounding surface of the cell along u: (distance, surface index)."""
        best = (math.inf, -1)
        for surf_idx, _sense in self.cells[cell_index].surfaces:
            d = self.surfaces[surf_idx].distance(r, u)
            if d < best[0]:
                best = (d, surf_idx)
        return best


def build_c5g7_pincell(materials: list, outer_bc: int = BoundaryCondition.REFLECTIVE) -> Geometry:
    """Build a single UO2 pincell (C5G7 benchmark).

    Geometry:
        - 7 surfaces: 4 x/y planes + 2 z planes + 1 fuel cylinder
        - 2 cells: fuel (materials[0]) and moderator (materials[1])
        - Outer planes use outer_bc (reflective approximates an infinite lattice)
    """
    surfaces = [
        Surface.plane_x(0.0, bc=outer_bc),     # 0: left
        Surface.plane_x(1.26, bc=outer_bc),    # 1: right
        Surface.plane_y(0.0, bc=outer_bc),     # 2: bottom
        Surface.plane_y(1.26, bc=outer_bc),    # 3: top
        Surface.plane_z(0.0, bc=outer_bc),     # 4: back
        Surface.plane_z(1.0, bc=outer_bc),     # 5: front
        Surface.cylinder_z(0.63, 0.63, 0.54, bc=BoundaryCondition.TRANSMISSIVE),  # 6: fuel pin
    ]

    fuel = Cell(material_index=0, name="fuel", surfaces=[
        (0, 1), (1, -1), (2, 1), (3, -1), (4, 1), (5, -1), (6, -1)
    ])
    moderator = Cell(material_index=1, name="moderator", surfaces=[
        (0, 1), (1, -1), (2, 1), (3, -1), (4, 1), (5, -1), (6, 1)
    ])

    return Geometry(surfaces, [fuel, moderator], materials)
