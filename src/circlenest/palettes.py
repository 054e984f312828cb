"""
Color themes for rendered packings.

The first color of each theme is the background; circles alternate through
the rest by nesting depth.
"""

from typing import Dict, Optional, Tuple

import numpy as np

Palette = Tuple[str, ...]

PALETTES: Dict[str, Palette] = {
    # duo
    "dt01": ("#172a89", "#f7f7f3"),
    "dt02": ("#302956", "#f3c507"),
    "dt03": ("#000000", "#a7a7a7"),
    "dt04": ("#50978e", "#f7f0df"),
    "dt05": ("#ee5d65", "#f0e5cb"),
    "dt06": ("#271f47", "#e7ceb5"),
    "dt07": ("#6a98a5", "#d24c18"),
    "dt08": ("#5d9d88", "#ebb43b"),
    "dt09": ("#052e57", "#de8d80"),
    # rag
    "rag-mysore": ("#ec6c26", "#613a53", "#e8ac52", "#639aa0"),
    "rag-gol": ("#d3693e", "#803528", "#f1b156", "#90a798"),
    "rag-belur": ("#f46e26", "#68485f", "#3d273a", "#535d55"),
    "rag-bangalore": ("#ea720e", "#ca5130", "#e9c25a", "#52534f"),
    "rag-taj": ("#ce565e", "#8e1752", "#f8a100", "#3ac1a6"),
    "rag-virupaksha": ("#f5736a", "#925951", "#feba4c", "#9d9b9d"),
}


def get_palette(name: str) -> Optional[Palette]:
    return PALETTES.get(name)


def random_palette(rng: np.random.Generator) -> Tuple[str, Palette]:
    """Pick a (name, colors) theme at random."""
    names = sorted(PALETTES)
    name = names[int(rng.integers(len(names)))]
    return name, PALETTES[name]
