from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class Channel(Enum):
    """One animated degree of freedom; the value is the BVH literal."""

    XPosition = "Xposition"
    YPosition = "Yposition"
    ZPosition = "Zposition"
    XRotation = "Xrotation"
    YRotation = "Yrotation"
    ZRotation = "Zrotation"

    @classmethod
    def from_literal(cls, literal: str) -> "Channel":
        return cls(literal)


@dataclass(frozen=True)
class Offset:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class EndSite:
    offset: Offset


@dataclass(frozen=True)
class Joints:
    joints: Tuple["Joint", ...]


# A joint either nests child joints or terminates in an end site, never both.
JointChildren = Union[Joints, EndSite]


@dataclass(frozen=True)
class Joint:
    name: str
    offset: Offset
    channels: Tuple[Channel, ...]  # fixes this joint's column order in a frame
    children: JointChildren


@dataclass(frozen=True)
class Hierarchy:
    root: Joint


@dataclass(frozen=True)
class Motion:
    num_frames: int
    frame_time: float  # seconds
    frame_data: Tuple[float, ...]  # row-major, frames x total_channels(root)


@dataclass(frozen=True)
class Bvh:
    hierarchy: Hierarchy
    motion: Motion
