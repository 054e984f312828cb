"""
Geometric primitives for circle packing.

Contains:
- Shape: the capability every packable container offers
- Bbox: axis-aligned rectangle
- Circle: plain circle, also the shape of every packed node
- Polygon: closed polyline with (possibly nested) holes

All distances are signed: negative inside a shape, positive outside and zero
on its boundary.
"""

import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

from .errors import InvalidShape

# Type aliases
Point = Tuple[float, float]

# Rejection sampling gives up after this many draws outside the polygon
MAX_SAMPLE_ATTEMPTS = 100_000


class RandomSource(Protocol):
    """Anything that draws uniform floats, e.g. numpy's Generator or random.Random."""

    def uniform(self, low: float, high: float) -> float:
        ...


@runtime_checkable
class Shape(Protocol):
    """Capability shared by every shape the packer can work with."""

    def bbox(self) -> "Bbox":
        ...

    def center(self) -> Point:
        ...

    def area(self) -> float:
        ...

    def sdf(self, x: float, y: float) -> float:
        ...

    def random_point(self, rng: RandomSource) -> Point:
        ...

    def to_svg(self, fill: str, stroke: str) -> ET.Element:
        ...


def _fmt(value: float) -> str:
    return str(round(float(value), 4))


@dataclass
class Bbox:
    """Axis-aligned rectangle. Corners are normalized so that x0 <= x1 and y0 <= y1."""
    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        self.x0, self.x1 = min(self.x0, self.x1), max(self.x0, self.x1)
        self.y0, self.y1 = min(self.y0, self.y1), max(self.y0, self.y1)

    @classmethod
    def from_point(cls, x: float, y: float) -> "Bbox":
        return cls(x, y, x, y)

    @classmethod
    def union(cls, boxes: Iterable["Bbox"]) -> "Bbox":
        """Smallest box enclosing all the given boxes."""
        boxes = list(boxes)
        if not boxes:
            raise InvalidShape("cannot take the union of zero bounding boxes")
        result = boxes[0].bbox()
        for b in boxes[1:]:
            result.expand(b.x0, b.y0)
            result.expand(b.x1, b.y1)
        return result

    def expand(self, x: float, y: float) -> None:
        """Grow the box so it contains (x, y)."""
        self.x0 = min(self.x0, x)
        self.x1 = max(self.x1, x)
        self.y0 = min(self.y0, y)
        self.y1 = max(self.y1, y)

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    def bbox(self) -> "Bbox":
        return Bbox(self.x0, self.y0, self.x1, self.y1)

    def center(self) -> Point:
        return ((self.x0 + self.x1) / 2.0, (self.y0 + self.y1) / 2.0)

    def area(self) -> float:
        return self.width * self.height

    def sdf(self, x: float, y: float) -> float:
        cx, cy = self.center()
        dx = abs(x - cx) - self.width / 2.0
        dy = abs(y - cy) - self.height / 2.0

        outside = math.sqrt(max(dx, 0.0) ** 2 + max(dy, 0.0) ** 2)
        inside = min(max(dx, dy), 0.0)
        return outside + inside

    def random_point(self, rng: RandomSource) -> Point:
        return (float(rng.uniform(self.x0, self.x1)), float(rng.uniform(self.y0, self.y1)))

    def to_svg(self, fill: str, stroke: str) -> ET.Element:
        return ET.Element("rect", {
            "x": _fmt(self.x0),
            "y": _fmt(self.y0),
            "width": _fmt(self.width),
            "height": _fmt(self.height),
            "fill": fill,
            "stroke": stroke,
        })


@dataclass
class Circle:
    """Circle centered at (x, y). The radius can go negative while a candidate is shrunk."""
    x: float
    y: float
    radius: float

    def bbox(self) -> Bbox:
        return Bbox(self.x - self.radius, self.y - self.radius,
                    self.x + self.radius, self.y + self.radius)

    def center(self) -> Point:
        return (self.x, self.y)

    def area(self) -> float:
        return math.pi * self.radius ** 2

    def sdf(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y) - self.radius

    def random_point(self, rng: RandomSource) -> Point:
        # Uniform in angle and distance, so samples cluster towards the center.
        a = float(rng.uniform(0.0, 2.0 * math.pi))
        d = float(rng.uniform(0.0, self.radius))
        return (self.x + math.cos(a) * d, self.y + math.sin(a) * d)

    def to_svg(self, fill: str, stroke: str) -> ET.Element:
        return ET.Element("circle", {
            "cx": _fmt(self.x),
            "cy": _fmt(self.y),
            "r": _fmt(self.radius),
            "fill": fill,
            "stroke": stroke,
        })


class Polygon:
    """
    Closed polygon with optional holes.

    The closing edge from the last point back to the first is implied. Centroid
    and bounding box are computed once, from the outer ring only.

    Holes are accepted through push_hole() only when every hole vertex lies
    strictly inside the polygon. Edges are not checked, so a hole can still
    cross the boundary between two of its vertices.
    """

    def __init__(self, points: Sequence[Point], max_sample_attempts: int = MAX_SAMPLE_ATTEMPTS):
        pts = np.asarray(points, dtype=float)
        if pts.size == 0:
            raise InvalidShape("a polygon needs at least one point")
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise InvalidShape(f"expected a sequence of (x, y) points, got shape {pts.shape}")

        self.points = pts
        self.max_sample_attempts = max_sample_attempts
        self._holes: List["Polygon"] = []
        self._precompute_edges()

        cx, cy = np.mean(pts, axis=0)
        self._center = (float(cx), float(cy))
        x0, y0 = np.min(pts, axis=0)
        x1, y1 = np.max(pts, axis=0)
        self._bbox = Bbox(float(x0), float(y0), float(x1), float(y1))

    def _precompute_edges(self) -> None:
        """Edge i runs from vertex i back to vertex i - 1."""
        self.edge_ends = np.roll(self.points, 1, axis=0)
        self.edge_vecs = self.edge_ends - self.points
        self.edge_lengths_sq = np.sum(self.edge_vecs ** 2, axis=1)

    def __repr__(self) -> str:
        return f"Polygon(points={self.points.tolist()!r}, holes={len(self._holes)})"

    @property
    def holes(self) -> Tuple["Polygon", ...]:
        return tuple(self._holes)

    def push_hole(self, hole: "Polygon") -> bool:
        """Add a hole if all its vertices are inside. Returns whether it was kept."""
        contained = all(self.sdf(x, y) < 0.0 for x, y in hole.points)
        if not contained:
            return False
        self._holes.append(hole)
        return True

    def bbox(self) -> Bbox:
        return self._bbox.bbox()

    def center(self) -> Point:
        return self._center

    def area(self) -> float:
        x, y = self.points[:, 0], self.points[:, 1]
        shoelace = np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)
        area = abs(float(shoelace)) / 2.0
        return area - sum(h.area() for h in self._holes)

    def sdf(self, x: float, y: float) -> float:
        to_point = np.array([x, y]) - self.points
        dots = np.sum(to_point * self.edge_vecs, axis=1)

        with np.errstate(divide='ignore', invalid='ignore'):
            t = np.clip(dots / self.edge_lengths_sq, 0, 1)
            t = np.where(self.edge_lengths_sq == 0, 0, t)

        offsets = to_point - t[:, np.newaxis] * self.edge_vecs
        d = math.sqrt(float(np.min(np.sum(offsets ** 2, axis=1))))

        # Crossing number, one flip per edge straddling the horizontal ray
        above = y >= self.points[:, 1]
        below_end = y < self.edge_ends[:, 1]
        left = self.edge_vecs[:, 0] * to_point[:, 1] > self.edge_vecs[:, 1] * to_point[:, 0]
        flips = (above & below_end & left) | (~above & ~below_end & ~left)
        if np.count_nonzero(flips) % 2 == 1:
            d = -d

        for hole in self._holes:
            d = max(d, -hole.sdf(x, y))
        return d

    def random_point(self, rng: RandomSource, max_attempts: Optional[int] = None) -> Point:
        """Rejection-sample a point from the bounding box until one lands inside."""
        attempts = self.max_sample_attempts if max_attempts is None else max_attempts
        for _ in range(attempts):
            x, y = self._bbox.random_point(rng)
            if self.sdf(x, y) <= 0.0:
                return (x, y)
        raise InvalidShape(f"no interior point found after {attempts} samples; polygon may have zero area")

    def path_data(self) -> str:
        """SVG path data for the outer ring followed by every hole."""
        head, *rest = self.points
        parts = [f"M {_fmt(head[0])},{_fmt(head[1])}"]
        parts.extend(f"L {_fmt(px)},{_fmt(py)}" for px, py in rest)
        parts.append("Z")
        parts.extend(h.path_data() for h in self._holes)
        return " ".join(parts)

    def to_svg(self, fill: str, stroke: str) -> ET.Element:
        return ET.Element("path", {
            "d": self.path_data(),
            "fill": fill,
            "stroke": stroke,
            "fill-rule": "evenodd",
        })
