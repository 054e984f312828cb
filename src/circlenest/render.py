"""
SVG output for packed shape trees.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Sequence, TextIO, Union

from .geometry import Bbox
from .packer import PackShape

SVG_NS = "http://www.w3.org/2000/svg"

_PROLOG = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
)


def svg_document(roots: Sequence[PackShape], palette: Sequence[str]) -> ET.Element:
    """
    Build the <svg> element for one or more packed roots.

    The viewBox covers every root. A background rectangle uses palette[0],
    then every node is drawn with the palette entry for its color index,
    parents before their children.
    """
    if not roots:
        raise ValueError("need at least one root to render")
    if not palette:
        raise ValueError("palette must contain at least one color")

    bbox = Bbox.union(r.bbox() for r in roots)
    x, y, w, h = (str(round(float(v), 4)) for v in (bbox.x0, bbox.y0, bbox.width, bbox.height))

    svg = ET.Element("svg", {
        "xmlns": SVG_NS,
        "version": "1.1",
        "viewBox": f"{x} {y} {w} {h}",
    })
    ET.SubElement(svg, "rect", {
        "x": x, "y": y, "width": w, "height": h,
        "stroke": "none", "fill": palette[0],
    })

    for root in roots:
        for _, node in root.walk():
            svg.append(node.to_svg(palette[node.color % len(palette)], "none"))

    return svg


def dump_svg(out: TextIO, roots: Sequence[PackShape], palette: Sequence[str]) -> None:
    """Write an SVG document for the packed roots to a text stream."""
    svg = svg_document(roots, palette)
    ET.indent(svg, space="")
    out.write(_PROLOG)
    out.write(ET.tostring(svg, encoding="unicode"))
    out.write("\n")


def save_svg(path: Union[str, Path], roots: Union[PackShape, List[PackShape]], palette: Sequence[str]) -> Path:
    """Write the packed roots to an SVG file and return its path."""
    if isinstance(roots, PackShape):
        roots = [roots]
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        dump_svg(f, roots, palette)
    return path
