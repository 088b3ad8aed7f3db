"""Core game state: vectors, the player and the sprite animation clock."""

from __future__ import annotations

from dataclasses import dataclass

WIDTH = 1920
HEIGHT = 1080
ANIM_UPDATE = 1
ANIM_FRAMES = 4


@dataclass(frozen=True)
class Vector:
    """A 2D vector in map units."""

    x: float
    y: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector:
        return Vector(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)


@dataclass
class Player:
    """Player position, facing direction and camera plane."""

    position: Vector
    direction: Vector
    camera: Vector


@dataclass
class AnimationState:
    """Frame counter for the four-frame sprite animation."""

    frame: int = 0
    last_update: int = 0

    def tick(self) -> int:
        """Advance the clock by one drawn frame and return the current frame."""
        if self.last_update >= ANIM_UPDATE:
            self.frame = (self.frame + 1) % ANIM_FRAMES
            self.last_update = 0
        else:
            self.last_update += 1
        return self.frame