from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..config import LoadConfig
from .errors import BvhConsistencyError, BvhFrameDataError
from .grammar import Span, tokenize
from .layout import check_frame_data, iter_joints
from .types import Bvh, Channel, EndSite, Hierarchy, Joint, Joints, Motion, Offset

logger = logging.getLogger(__name__)


@dataclass
class _Cursor:
    spans: Sequence[Span]
    i: int = 0

    def expect_next(self, kind: str) -> Span:
        """Advance past the next span of `kind` and return it."""
        while self.i < len(self.spans):
            span = self.spans[self.i]
            self.i += 1
            if span.kind == kind:
                return span
        raise BvhConsistencyError(f"Expected a '{kind}' token, none left")

    def remaining(self, kind: str) -> List[Span]:
        return [s for s in self.spans[self.i:] if s.kind == kind]


def _to_float(span: Span) -> float:
    try:
        return float(span.text)
    except ValueError as e:
        raise BvhConsistencyError(
            f"Bad float literal {span.text!r} at line {span.line}, column {span.column}"
        ) from e


def _to_int(span: Span) -> int:
    try:
        return int(span.text)
    except ValueError as e:
        raise BvhConsistencyError(
            f"Bad integer literal {span.text!r} at line {span.line}, column {span.column}"
        ) from e


def _to_channel(span: Span) -> Channel:
    try:
        return Channel.from_literal(span.text)
    except ValueError as e:
        raise BvhConsistencyError(
            f"Unknown channel {span.text!r} at line {span.line}, column {span.column}"
        ) from e


def _to_floats(span: Span) -> List[float]:
    try:
        return [float(v) for v in span.text.split()]
    except ValueError as e:
        raise BvhConsistencyError(
            f"Bad frame value in block at line {span.line}, column {span.column}: {e}"
        ) from e


def _parse_offset(span: Span) -> Offset:
    cur = _Cursor(span.children)
    return Offset(
        x=_to_float(cur.expect_next("float")),
        y=_to_float(cur.expect_next("float")),
        z=_to_float(cur.expect_next("float")),
    )


def _parse_joint(body: Span) -> Joint:
    cur = _Cursor(body.children)

    name = cur.expect_next("identifier").text
    offset = _parse_offset(cur.expect_next("offset"))
    channels_span = cur.expect_next("channels")
    channels = tuple(_to_channel(s) for s in channels_span.children if s.kind == "channel")

    nested = cur.remaining("joint")
    if nested:
        joints = tuple(_parse_joint(_Cursor(j.children).expect_next("joint_body")) for j in nested)
        children = Joints(joints)
    else:
        try:
            end_site = cur.expect_next("end_site")
        except BvhConsistencyError as e:
            raise BvhConsistencyError(
                f"Joint '{name}' has neither child joints nor an End Site"
            ) from e
        children = EndSite(offset=_parse_offset(_Cursor(end_site.children).expect_next("offset")))

    return Joint(name=name, offset=offset, channels=channels, children=children)


def _parse_motion(span: Span) -> Motion:
    cur = _Cursor(_Cursor(span.children).expect_next("frames").children)
    num_frames = _to_int(cur.expect_next("integer"))
    frame_time = _to_float(cur.expect_next("float"))
    # Row boundaries are not tokenized; every remaining value belongs to the buffer.
    values: List[float] = []
    for block in cur.remaining("frame_values"):
        values.extend(_to_floats(block))
    return Motion(num_frames=num_frames, frame_time=frame_time, frame_data=tuple(values))


def _apply_frame_check(bvh: Bvh, mode: str) -> None:
    if mode == "off":
        return
    try:
        check_frame_data(bvh)
    except BvhFrameDataError as e:
        if mode == "strict":
            raise
        logger.warning(str(e))


def parse(text: str, config: Optional[LoadConfig] = None) -> Bvh:
    """Parse a whole BVH document.

    Raises BvhSyntaxError for text the grammar rejects, BvhConsistencyError when
    the token forest is missing a section the grammar should have guaranteed,
    and BvhFrameDataError under ``frame_check="strict"``. Never returns a
    partial result.
    """
    cfg = config or LoadConfig()

    root_span = tokenize(text)
    top = _Cursor(root_span.children)

    hierarchy = top.expect_next("hierarchy")
    root_joint = _Cursor(hierarchy.children).expect_next("root_joint")
    root = _parse_joint(_Cursor(root_joint.children).expect_next("joint_body"))

    motion = _parse_motion(top.expect_next("motion"))

    bvh = Bvh(hierarchy=Hierarchy(root=root), motion=motion)
    _apply_frame_check(bvh, cfg.frame_check)

    logger.debug(
        f"Parsed BVH: root={root.name}, joints={sum(1 for _ in iter_joints(root))}, "
        f"frames={motion.num_frames}, values={len(motion.frame_data)}"
    )
    return bvh


def load_bvh(path: str, config: Optional[LoadConfig] = None) -> Bvh:
    cfg = config or LoadConfig()
    with open(path, "r", encoding=cfg.encoding, errors=cfg.errors) as f:
        text = f.read()
    return parse(text, cfg)
