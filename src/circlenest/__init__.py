"""
circlenest - Nested random circle packing for rectangles, circles and polygons with holes.

Usage:
    from circlenest import Bbox, CirclePacker, PackingConfig, save_svg

    # Fill a rectangle
    packer = CirclePacker(Bbox(0, 0, 1920, 1080), PackingConfig(padding=5, min_radius=5))
    root = packer.pack()

    # Polygon with a hole, no nesting
    poly = Polygon([(0, 0), (100, 0), (100, 100), (0, 100)])
    poly.push_hole(Polygon([(40, 40), (60, 40), (60, 60), (40, 60)]))
    root = CirclePacker(poly, PackingConfig(inside=False), seed=1).pack()

    save_svg("packing.svg", root, ["#172a89", "#f7f7f3"])

Packing:
    Candidate circles are centered on random interior points and shrink to
    clear the boundary and the circles already placed. With nesting on, a
    candidate landing inside a placed circle is packed into that circle
    instead. Packing stops at the target coverage or after too many
    consecutive failures.
"""

from .config import PackingConfig, PackingProgress, PackingState
from .errors import CircleNestError, InvalidShape, PathSyntaxError
from .geometry import Bbox, Circle, Polygon, Shape
from .packer import CirclePacker, PackShape, pack, pack_all
from .paths import parse_path_d, polygon_from_path
from .render import dump_svg, save_svg, svg_document

__all__ = [
    "Bbox",
    "Circle",
    "Polygon",
    "Shape",
    "PackShape",
    "CirclePacker",
    "pack",
    "pack_all",
    "PackingConfig",
    "PackingProgress",
    "PackingState",
    "CircleNestError",
    "InvalidShape",
    "PathSyntaxError",
    "parse_path_d",
    "polygon_from_path",
    "dump_svg",
    "save_svg",
    "svg_document",
]

__version__ = "0.1.0"
