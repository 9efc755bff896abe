from __future__ import annotations

from typing import Dict, Iterator, List

import numpy as np

from .errors import BvhFrameDataError
from .types import Bvh, EndSite, Joint, Joints


def _child_joints(joint: Joint) -> List[Joint]:
    children = joint.children
    if isinstance(children, Joints):
        return list(children.joints)
    if isinstance(children, EndSite):
        return []
    raise TypeError(f"Unknown joint children variant: {type(children).__name__}")


def iter_joints(root: Joint) -> Iterator[Joint]:
    """Depth-first pre-order walk; end sites are not joints and are skipped."""
    stack = [root]
    while stack:
        joint = stack.pop()
        yield joint
        stack.extend(reversed(_child_joints(joint)))


def total_channels(joint: Joint) -> int:
    return len(joint.channels) + sum(total_channels(c) for c in _child_joints(joint))


def channel_columns(root: Joint) -> Dict[str, range]:
    """Return joint name -> column range of its channels inside one frame row."""
    mapping: Dict[str, range] = {}
    idx = 0
    for joint in iter_joints(root):
        mapping[joint.name] = range(idx, idx + len(joint.channels))
        idx += len(joint.channels)
    return mapping


def channel_labels(root: Joint) -> List[str]:
    return [f"{joint.name}.{ch.value}" for joint in iter_joints(root) for ch in joint.channels]


def expected_frame_values(bvh: Bvh) -> int:
    return bvh.motion.num_frames * total_channels(bvh.hierarchy.root)


def check_frame_data(bvh: Bvh) -> None:
    expected = expected_frame_values(bvh)
    got = len(bvh.motion.frame_data)
    if got != expected:
        width = total_channels(bvh.hierarchy.root)
        raise BvhFrameDataError(
            f"MOTION data has {got} values, expected {expected} "
            f"({bvh.motion.num_frames} frames x {width} channels)"
        )


def frame_matrix(bvh: Bvh) -> np.ndarray:
    """Return motion data as a (frames, channels) float64 array."""
    check_frame_data(bvh)
    width = total_channels(bvh.hierarchy.root)
    data = np.asarray(bvh.motion.frame_data, dtype=np.float64)
    return data.reshape(bvh.motion.num_frames, width)
