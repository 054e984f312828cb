"""
Command-line entry point: pack circles into a shape and save the result as SVG.
"""

import argparse
import sys
from typing import List, Optional, Sequence

import numpy as np

from .config import PackingConfig
from .errors import CircleNestError
from .geometry import Bbox, Polygon
from .packer import PackShape, pack_all
from .palettes import PALETTES, get_palette, random_palette
from .paths import polygon_from_path
from .render import save_svg


def rhombus(width: float, height: float) -> Polygon:
    """A rhombus with a rhombus hole, which has its own rhombus hole."""
    def ring(sx: float, sy: float) -> Polygon:
        hw, hh = width / 2 * sx, height / 2 * sy
        return Polygon([(0.0, -hh), (hw, 0.0), (0.0, hh), (-hw, 0.0)])

    container = ring(1.0, 1.0)
    hole = ring(0.8, 0.6)
    hole.push_hole(ring(0.6, 0.2))
    container.push_hole(hole)
    return container


def build_roots(args: argparse.Namespace) -> List[PackShape]:
    if args.path:
        shapes = [polygon_from_path(d) for d in args.path]
    elif args.shape == "rhombus":
        shapes = [rhombus(args.width, args.height)]
    else:
        shapes = [Bbox(0.0, 0.0, args.width, args.height)]
    return [PackShape(s) for s in shapes]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="circlenest",
        description="Create SVG images from random nested circle packing runs.",
    )
    parser.add_argument("--list-themes", action="store_true",
                        help="Show available themes and exit.")
    parser.add_argument("-p", "--padding", type=float, default=5.0,
                        help="Padding between the circles.")
    parser.add_argument("-r", "--min-radius", type=float, default=5.0,
                        help="Minimum radius all the packed circles must have.")
    parser.add_argument("--target-coverage", type=float, default=0.8,
                        help="Fraction in (0, 1] of the total area that must be packed with circles.")
    parser.add_argument("--no-inside", action="store_true",
                        help="Do not nest circles inside other circles.")
    parser.add_argument("--max-stall", type=int, default=1000,
                        help="Stop after this many consecutive failed placements.")
    parser.add_argument("-t", "--theme",
                        help="Theme to use when saving the final image. Random if omitted.")
    parser.add_argument("-W", "--width", type=float, default=1920,
                        help="Width of the image.")
    parser.add_argument("-H", "--height", type=float, default=1080,
                        help="Height of the image.")
    parser.add_argument("--shape", choices=("rect", "rhombus"), default="rect",
                        help="Container shape to fill.")
    parser.add_argument("--path", action="append", metavar="D",
                        help="SVG path data (M/L/H/V/Z) to fill instead of --shape. "
                             "Repeat to pack several shapes.")
    parser.add_argument("--seed", type=int, help="Seed for the random generator.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print packing progress.")
    parser.add_argument("-o", "--output", default="packing.svg",
                        help="Path where to save the image at.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    rng = np.random.default_rng(args.seed)

    if args.list_themes:
        print("Available themes")
        print()
        for name, colors in PALETTES.items():
            print(f"  {name}: {list(colors)}")
        print()
        return 0

    palette = get_palette(args.theme) if args.theme else None
    theme_name = args.theme
    if palette is None:
        if args.theme:
            print(f"theme {args.theme} not found, using a random one")
        theme_name, palette = random_palette(rng)
    print(f"using theme {theme_name}")

    try:
        config = PackingConfig(
            padding=args.padding,
            min_radius=args.min_radius,
            inside=not args.no_inside,
            target_coverage=args.target_coverage,
            max_stall_iterations=args.max_stall,
            num_colors=len(palette),
            verbose=args.verbose,
        )
        roots = build_roots(args)
    except (ValueError, CircleNestError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    for root in roots:
        root.color = 1 % len(palette)

    pack_all(roots, config, rng)
    out = save_svg(args.output, roots, palette)
    print(f"saved {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
