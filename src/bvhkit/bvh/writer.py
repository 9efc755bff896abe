"""BVH (BioVision Hierarchy) text writer.

Emits the canonical layout: one keyword per line, no indentation, and motion
rows cut from the flat frame buffer by the hierarchy's channel count. Floats
use Python's shortest round-tripping repr, so values survive a write/read
cycle even though the original text formatting does not.
"""

from __future__ import annotations

import io
from typing import Iterable, TextIO

from .layout import total_channels
from .types import Bvh, EndSite, Joint, Joints, Offset


def _fmt(v: float) -> str:
    return repr(float(v))


def _write_offset(f: TextIO, offset: Offset) -> None:
    f.write(f"OFFSET {_fmt(offset.x)} {_fmt(offset.y)} {_fmt(offset.z)}\n")


def _write_joint(f: TextIO, joint: Joint, keyword: str) -> None:
    f.write(f"{keyword} {joint.name}\n")
    f.write("{\n")
    _write_offset(f, joint.offset)
    f.write(" ".join(["CHANNELS", str(len(joint.channels))] + [ch.value for ch in joint.channels]) + "\n")

    children = joint.children
    if isinstance(children, Joints):
        for child in children.joints:
            _write_joint(f, child, "JOINT")
    elif isinstance(children, EndSite):
        f.write("End Site\n")
        f.write("{\n")
        _write_offset(f, children.offset)
        f.write("}\n")
    else:
        raise TypeError(f"Unknown joint children variant: {type(children).__name__}")

    f.write("}\n")


def _rows(values: Iterable[float], width: int) -> Iterable[str]:
    data = list(values)
    for start in range(0, len(data), width):
        yield " ".join(_fmt(v) for v in data[start:start + width])


def serialize(bvh: Bvh, sink: TextIO) -> None:
    """Write `bvh` to `sink`. Errors raised by ``sink.write`` propagate as-is."""
    sink.write("HIERARCHY\n")
    _write_joint(sink, bvh.hierarchy.root, "ROOT")

    motion = bvh.motion
    sink.write("MOTION\n")
    sink.write(f"Frames: {motion.num_frames}\n")
    sink.write(f"Frame Time: {_fmt(motion.frame_time)}\n")

    width = total_channels(bvh.hierarchy.root)
    if width == 0:
        return
    for row in _rows(motion.frame_data, width):
        sink.write(row + "\n")


def dumps(bvh: Bvh) -> str:
    buf = io.StringIO()
    serialize(bvh, buf)
    return buf.getvalue()


def save_bvh(bvh: Bvh, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        serialize(bvh, f)
