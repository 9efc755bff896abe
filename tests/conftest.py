from __future__ import annotations

import pytest

from bvhkit.bvh.types import Bvh, Channel, EndSite, Hierarchy, Joint, Joints, Motion, Offset

MINIMAL_BVH = """\
HIERARCHY
ROOT Hips
{
OFFSET 0 0 0
CHANNELS 3 Xposition Yposition Zposition
End Site
{
OFFSET 0 0 1
}
}
MOTION
Frames: 1
Frame Time: 0.0333333
0 0 0
"""

# Three nesting levels under the root, three siblings directly under it.
SKELETON_BVH = """\
HIERARCHY
ROOT Hips
{
\tOFFSET 0.00 0.00 0.00
\tCHANNELS 6 Xposition Yposition Zposition Zrotation Xrotation Yrotation
\tJOINT Spine
\t{
\t\tOFFSET 0.00 5.21 0.00
\t\tCHANNELS 3 Zrotation Xrotation Yrotation
\t\tJOINT Neck
\t\t{
\t\t\tOFFSET 0.00 18.65 0.00
\t\t\tCHANNELS 3 Zrotation Xrotation Yrotation
\t\t\tJOINT Head
\t\t\t{
\t\t\t\tOFFSET 0.00 5.45 0.00
\t\t\t\tCHANNELS 3 Zrotation Xrotation Yrotation
\t\t\t\tEnd Site
\t\t\t\t{
\t\t\t\t\tOFFSET 0.00 3.87 0.00
\t\t\t\t}
\t\t\t}
\t\t}
\t}
\tJOINT LeftUpLeg
\t{
\t\tOFFSET 3.91 0.00 0.00
\t\tCHANNELS 3 Zrotation Xrotation Yrotation
\t\tEnd Site
\t\t{
\t\t\tOFFSET 0.00 -18.34 0.00
\t\t}
\t}
\tJOINT RightUpLeg
\t{
\t\tOFFSET -3.91 0.00 0.00
\t\tCHANNELS 3 Zrotation Xrotation Yrotation
\t\tEnd Site
\t\t{
\t\t\tOFFSET 0.00 -18.34 0.00
\t\t}
\t}
}
MOTION
Frames: 2
Frame Time: 0.008333
8.03 35.01 88.36 -3.41 14.78 -164.35 -3.33 -0.99 2.17 1.21 0.15 -0.55 4.03 -1.27 0.88 -12.5 2.25 -7.14
7.81 35.10 86.47 -3.78 12.94 -166.97 -3.41 -1.07 2.31 1.30 0.18 -0.61 4.22 -1.33 0.91 -12.9 2.41 -7.02
"""

SKELETON_CHANNELS = 18


def _rot3():
    return (Channel.ZRotation, Channel.XRotation, Channel.YRotation)


@pytest.fixture
def minimal_text() -> str:
    return MINIMAL_BVH


@pytest.fixture
def skeleton_text() -> str:
    return SKELETON_BVH


@pytest.fixture
def arm_bvh() -> Bvh:
    """Hand-built two-branch skeleton with 3 frames x 12 channels."""
    hand = Joint(
        name="LeftHand",
        offset=Offset(0.0, -9.5, 0.25),
        channels=_rot3(),
        children=EndSite(offset=Offset(0.0, -3.0, 0.0)),
    )
    forearm = Joint(
        name="LeftForeArm",
        offset=Offset(0.0, -11.0, 0.0),
        channels=_rot3(),
        children=Joints((hand,)),
    )
    head = Joint(
        name="Head",
        offset=Offset(0.0, 6.5, 1e-05),
        channels=(),
        children=EndSite(offset=Offset(0.0, 4.0, 0.0)),
    )
    root = Joint(
        name="Chest",
        offset=Offset(1.5, 90.0, -0.1),
        channels=(
            Channel.XPosition, Channel.YPosition, Channel.ZPosition,
            Channel.YRotation, Channel.XRotation, Channel.ZRotation,
        ),
        children=Joints((forearm, head)),
    )
    frame_data = tuple(float(i) * 0.1 - 1.7 for i in range(3 * 12))
    return Bvh(
        hierarchy=Hierarchy(root=root),
        motion=Motion(num_frames=3, frame_time=1.0 / 30.0, frame_data=frame_data),
    )
