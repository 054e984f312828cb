"""
Recursive circle packing.

A PackShape wraps any shape and owns the circles packed directly inside it.
Each of those circles is itself a PackShape, so it can receive nested circles
of its own. CirclePacker drives the sampling loop over a root PackShape.
"""

import xml.etree.ElementTree as ET
from typing import Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar, Union

import numpy as np

from .config import PackingConfig, PackingProgress, PackingState
from .geometry import Bbox, Circle, Point, RandomSource, Shape

S = TypeVar("S", bound=Shape)


class PackShape(Generic[S]):
    """
    A container shape plus the circles packed inside it.

    Geometric queries are forwarded to the container, so a PackShape can be
    used anywhere a Shape is expected. The tree only grows: children are
    appended by pack() and never removed, and they keep no reference to
    their parent.
    """

    def __init__(self, shape: S, color: int = 0):
        self.container = shape
        self.color = color
        self._children: List["PackShape[Circle]"] = []
        self._occupied_area = 0.0

    @classmethod
    def circle(cls, x: float, y: float, radius: float, color: int = 0) -> "PackShape[Circle]":
        return cls(Circle(x, y, radius), color)

    def __repr__(self) -> str:
        return f"PackShape({self.container!r}, color={self.color}, children={len(self._children)})"

    @property
    def children(self) -> Tuple["PackShape[Circle]", ...]:
        return tuple(self._children)

    @property
    def occupied_area(self) -> float:
        """Total area of the circles packed directly in this shape, not counting deeper levels."""
        return self._occupied_area

    @property
    def radius(self) -> float:
        return self.container.radius

    @radius.setter
    def radius(self, value: float) -> None:
        self.container.radius = value

    # =========================================================================
    # Shape capability, forwarded to the container
    # =========================================================================

    def bbox(self) -> Bbox:
        return self.container.bbox()

    def center(self) -> Point:
        return self.container.center()

    def area(self) -> float:
        return self.container.area()

    def sdf(self, x: float, y: float) -> float:
        return self.container.sdf(x, y)

    def random_point(self, rng: RandomSource) -> Point:
        return self.container.random_point(rng)

    def to_svg(self, fill: str, stroke: str) -> ET.Element:
        return self.container.to_svg(fill, stroke)

    # =========================================================================
    # Placement
    # =========================================================================

    def pack(self, candidate: "PackShape[Circle]", config: PackingConfig) -> bool:
        """
        Try to place a candidate circle in this shape.

        Children are visited in insertion order. The candidate shrinks to keep
        `padding` away from each of them. When nesting is enabled and the
        candidate's center lies deeper than `padding` inside a child, the
        candidate is handed to that child instead and no later sibling is
        consulted.

        The tree is only touched when the candidate is accepted.

        Returns:
            True if the candidate (or a nested version of it) was placed.
        """
        x, y = candidate.center()

        for child in self._children:
            d = child.sdf(x, y)

            if config.inside and d < -config.padding:
                candidate.radius = -d - config.padding
                candidate.color = (candidate.color + 1) % config.num_colors
                return child.pack(candidate, config)

            if d - config.padding < candidate.radius:
                candidate.radius = d - config.padding

        if candidate.radius >= config.min_radius:
            self._children.append(candidate)
            self._occupied_area += candidate.area()
            return True

        return False

    def walk(self) -> Iterator[Tuple[int, "PackShape"]]:
        """Yield (depth, node) for this node and all descendants, parents first."""
        stack: List[Tuple[int, PackShape]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, c) for c in reversed(node._children))


class CirclePacker:
    """Packs circles into a root shape by random sampling until coverage or stall."""

    def __init__(
        self,
        shape: Union[Shape, PackShape],
        config: Optional[PackingConfig] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or PackingConfig()
        self.root = shape if isinstance(shape, PackShape) else PackShape(shape)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.progress = PackingProgress(max_stall_iterations=self.config.max_stall_iterations)

    def _sample_candidate(self) -> PackShape[Circle]:
        x, y = self.root.random_point(self.rng)
        radius = -self.root.sdf(x, y) - self.config.padding
        return PackShape.circle(x, y, radius)

    def generate(self) -> Iterator[PackShape[Circle]]:
        """
        Place circles until the target coverage is reached or too many
        consecutive placements fail.

        Stopping on stalls is a normal outcome: the tree is simply left
        partially filled.

        Yields:
            Each accepted circle node, at whatever depth it landed.
        """
        target_area = self.config.target_coverage * self.root.area()
        self.progress = PackingProgress(
            max_stall_iterations=self.config.max_stall_iterations,
            occupied_area=self.root.occupied_area,
            target_area=target_area,
        )
        progress = self.progress

        while not progress.target_reached:
            candidate = self._sample_candidate()

            if self.root.pack(candidate, self.config):
                progress.circles_placed += 1
                progress.stall_iterations = 0
                progress.occupied_area = self.root.occupied_area
                progress.state = PackingState.RUNNING

                if self.config.verbose and progress.circles_placed % 25 == 0:
                    print(progress)

                yield candidate
            else:
                progress.stall_iterations += 1
                progress.state = PackingState.STALLING

                if progress.stall_iterations >= self.config.max_stall_iterations:
                    break

                if self.config.verbose and progress.stall_iterations % 250 == 0:
                    print(progress)

        progress.state = PackingState.DONE
        if self.config.verbose:
            print(f"Done! {progress}")

    def pack(self) -> PackShape:
        """Run the packing loop to completion and return the root of the tree."""
        for _ in self.generate():
            pass
        return self.root


def pack(
    root: Union[Shape, PackShape],
    config: Optional[PackingConfig] = None,
    rng: Optional[RandomSource] = None,
) -> PackShape:
    """Pack a single root shape. See CirclePacker.generate for the stopping rules."""
    return CirclePacker(root, config, rng).pack()


def pack_all(
    roots: Sequence[Union[Shape, PackShape]],
    config: Optional[PackingConfig] = None,
    rng: Optional[RandomSource] = None,
) -> List[PackShape]:
    """Pack independent roots one after another, sharing one random source."""
    rng = rng if rng is not None else np.random.default_rng()
    return [CirclePacker(root, config, rng).pack() for root in roots]
