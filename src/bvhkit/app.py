"""Command-line wrapper around the BVH reader and writer.

Usage:
    python -m bvhkit info walk.bvh
    python -m bvhkit normalize walk.bvh -o walk_clean.bvh
    python -m bvhkit check walk.bvh
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .bvh.errors import BvhParseError
from .bvh.layout import iter_joints, total_channels
from .bvh.loader import load_bvh
from .bvh.writer import save_bvh, serialize
from .config import LoadConfig

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def _cmd_info(args: argparse.Namespace) -> int:
    bvh = load_bvh(args.path, LoadConfig(frame_check="off"))
    root = bvh.hierarchy.root
    motion = bvh.motion
    print(f"Root:        {root.name}")
    print(f"Joints:      {sum(1 for _ in iter_joints(root))}")
    print(f"Channels:    {total_channels(root)}")
    print(f"Frames:      {motion.num_frames}")
    print(f"Frame Time:  {motion.frame_time}")
    print(f"Duration:    {motion.num_frames * motion.frame_time:.3f}s")
    return 0


def _cmd_normalize(args: argparse.Namespace) -> int:
    bvh = load_bvh(args.path)
    if args.output:
        save_bvh(bvh, args.output)
        logger.info(f"Wrote {args.output}")
    else:
        serialize(bvh, sys.stdout)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    load_bvh(args.path, LoadConfig(frame_check="strict"))
    print(f"{args.path}: OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bvhkit", description="Read and rewrite BVH motion files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_info = sub.add_parser("info", help="Print a summary of a BVH file")
    p_info.add_argument("path", help="Input BVH file")
    p_info.set_defaults(func=_cmd_info)

    p_norm = sub.add_parser("normalize", help="Rewrite a BVH file in canonical layout")
    p_norm.add_argument("path", help="Input BVH file")
    p_norm.add_argument("-o", "--output", default=None, help="Output BVH file (default: stdout)")
    p_norm.set_defaults(func=_cmd_normalize)

    p_check = sub.add_parser("check", help="Verify MOTION data matches the hierarchy's channels")
    p_check.add_argument("path", help="Input BVH file")
    p_check.set_defaults(func=_cmd_check)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        return args.func(args)
    except BvhParseError as e:
        logger.error(f"{args.path}: {e}")
        return 1
    except OSError as e:
        logger.error(f"{args.path}: {e}")
        return 2
