"""Sketch geometry for the bolt.

Pure functions computing the points the builder stages hand to the kernel.
All lengths are in cm, angles in radians.
"""

import math
from typing import List, Tuple

from .models import BoltParameters, Point2D, Point3D

HEX_SIDES = 6

# Under-head cuts start at the hexagon's flats, r*cos(30deg) from the axis
FLAT_ANGLE = math.pi / 6

Segment = Tuple[Point3D, Point3D]
Triangle = Tuple[Point2D, Point2D, Point2D]


def hexagon_vertices(center: Point3D, diameter: float) -> List[Point3D]:
    """Corners of a regular hexagon inscribed in a circle of ``diameter``.

    Vertex i sits at angle i * 60deg, starting on the +X axis.
    """
    radius = diameter / 2
    return [
        Point3D(
            x=center.x + radius * math.cos(math.pi * i / 3),
            y=center.y + radius * math.sin(math.pi * i / 3),
            z=center.z,
        )
        for i in range(HEX_SIDES)
    ]


def hexagon_segments(vertices: List[Point3D]) -> List[Segment]:
    """Hexagon sides, each drawn from vertex i+1 back to vertex i.

    The reversed direction makes the loop clockwise seen from +Z; the head's
    face and loop lookups rely on this winding.
    """
    count = len(vertices)
    return [(vertices[(i + 1) % count], vertices[i]) for i in range(count)]


def under_head_profiles(parameters: BoltParameters) -> Tuple[Triangle, Triangle]:
    """Triangles revolved to cut the taper at the base and the top of the head.

    Points are (radial, axial) coordinates in the plane containing the bolt
    axis, with the head spanning axial 0 to ``head_height``.
    """
    radius = parameters.head_diameter / 2
    slope = math.tan(parameters.cut_angle)
    height = parameters.head_height

    p1 = Point2D(x=radius * math.cos(FLAT_ANGLE), y=0.0)
    p2 = Point2D(x=radius, y=0.0)
    p3 = Point2D(x=p2.x, y=(p2.x - p1.x) * slope)

    p4 = Point2D(x=radius * math.cos(FLAT_ANGLE), y=height)
    p5 = Point2D(x=radius, y=height)
    p6 = Point2D(x=p2.x, y=height - (p5.x - p4.x) * slope)

    return (p1, p2, p3), (p4, p5, p6)


def triangle_segments(triangle: Triangle, center: Point3D) -> List[Segment]:
    """Closed loop p1->p2->p3->p1 placed in the model XZ plane through ``center``."""
    points = [Point3D(x=center.x + p.x, y=center.y, z=center.z + p.y) for p in triangle]
    return [(points[i], points[(i + 1) % len(points)]) for i in range(len(points))]


def polygon_area(points: List[Point2D]) -> float:
    """Signed shoelace area; negative for a clockwise loop."""
    area = 0.0
    for i, point in enumerate(points):
        following = points[(i + 1) % len(points)]
        area += point.x * following.y - following.x * point.y
    return area / 2
