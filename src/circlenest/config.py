"""
Configuration and progress tracking for circle packing.
"""

from dataclasses import dataclass
from enum import Enum


class PackingState(Enum):
    """Where the top-level packing loop currently is."""
    RUNNING = "running"
    STALLING = "stalling"
    DONE = "done"


@dataclass
class PackingConfig:
    """
    Configuration parameters for the circle packing algorithm.

    Basic parameters:
        padding: Minimum gap between circles and between circles and edges
        min_radius: Smallest circle that will be placed
        inside: Allow new circles to be nested inside already placed ones

    Stopping:
        target_coverage: Fraction of the root area (0, 1] to cover with
            circles placed directly in the root. Nested circles do not count.
        max_stall_iterations: Stop after this many consecutive failed placements

    Coloring:
        num_colors: Palette size. A circle nested one level deeper gets the
            next color index, wrapping around.

    Output:
        verbose: Print progress while packing
    """
    # Basic parameters
    padding: float = 5.0
    min_radius: float = 5.0
    inside: bool = True

    # Stopping
    target_coverage: float = 0.8
    max_stall_iterations: int = 1000

    # Coloring
    num_colors: int = 2

    # Output
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.padding < 0:
            raise ValueError(f"padding must be >= 0, got {self.padding}")
        if not 0 < self.target_coverage <= 1:
            raise ValueError(f"target_coverage must be in (0, 1], got {self.target_coverage}")
        if self.max_stall_iterations < 1:
            raise ValueError(f"max_stall_iterations must be >= 1, got {self.max_stall_iterations}")
        if self.num_colors < 1:
            raise ValueError(f"num_colors must be >= 1, got {self.num_colors}")


@dataclass
class PackingProgress:
    """Tracks the current state of the packing loop."""
    circles_placed: int = 0
    stall_iterations: int = 0
    max_stall_iterations: int = 1000
    occupied_area: float = 0.0
    target_area: float = 0.0
    state: PackingState = PackingState.RUNNING

    @property
    def coverage_ratio(self) -> float:
        """Fraction of the target area covered so far (1.0 = target reached)."""
        return self.occupied_area / self.target_area if self.target_area > 0 else 1.0

    @property
    def stall_ratio(self) -> float:
        """How close to giving up (0.0 = just placed a circle, 1.0 = stopping)."""
        return self.stall_iterations / self.max_stall_iterations if self.max_stall_iterations > 0 else 0

    @property
    def target_reached(self) -> bool:
        return self.occupied_area >= self.target_area

    def __str__(self) -> str:
        return (f"[{self.state.value}] Placed: {self.circles_placed} | "
                f"Coverage: {self.coverage_ratio:.0%} of target | "
                f"Stalled: {self.stall_iterations}/{self.max_stall_iterations} ({self.stall_ratio:.0%})")
