"""
Load polygons from SVG path data.

Only absolute commands are understood: M, L, H, V and Z. Extra coordinate
pairs after M or L are treated as further L commands, as in SVG.
"""

import re
from typing import List

from .errors import PathSyntaxError
from .geometry import Point, Polygon

_TOKEN = re.compile(r"[A-Za-z]|[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_SEPARATORS = re.compile(r"[\s,]*")


def _tokenize(d: str) -> List[str]:
    leftover = _SEPARATORS.sub("", _TOKEN.sub(" ", d))
    if leftover:
        raise PathSyntaxError(f"unexpected characters in path data: {leftover!r}")
    return _TOKEN.findall(d)


def parse_path_d(d: str) -> List[List[Point]]:
    """
    Split path data into subpaths, each a list of (x, y) points.

    A subpath ends at Z or at the next M. The closing point is not repeated.
    """
    tokens = _tokenize(d)
    subpaths: List[List[Point]] = []
    path: List[Point] = []
    start = last = None
    command = None
    i = 0

    def number() -> float:
        nonlocal i
        if i >= len(tokens) or tokens[i].isalpha():
            raise PathSyntaxError(f"command {command!r} is missing a coordinate")
        value = float(tokens[i])
        i += 1
        return value

    while i < len(tokens):
        token = tokens[i]
        if token.isalpha():
            command = token
            i += 1
            if command not in "MLHVZ":
                raise PathSyntaxError(f"unsupported path command {command!r}")
        elif command is None:
            raise PathSyntaxError("path data must start with a command")

        if command == "Z":
            if path:
                subpaths.append(path)
                path = []
            last = start
            command = None
            continue

        if command == "M":
            if path:
                subpaths.append(path)
            x, y = number(), number()
            path = [(x, y)]
            start = last = (x, y)
            command = "L"
            continue

        if last is None:
            raise PathSyntaxError(f"command {command!r} has no current point")
        if not path:
            path = [last]
            start = last

        if command == "L":
            last = (number(), number())
        elif command == "H":
            last = (number(), last[1])
        else:
            last = (last[0], number())
        path.append(last)

    if path:
        subpaths.append(path)
    return subpaths


def polygon_from_path(d: str) -> Polygon:
    """
    Build a polygon from path data: the first subpath is the boundary and the
    rest are pushed as holes. Holes that fail the containment check are dropped.
    """
    subpaths = parse_path_d(d)
    if not subpaths:
        raise PathSyntaxError("path data contains no subpaths")

    boundary = Polygon(subpaths[0])
    for points in subpaths[1:]:
        boundary.push_hole(Polygon(points))
    return boundary
