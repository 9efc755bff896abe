from __future__ import annotations

from dataclasses import dataclass

FRAME_CHECK_MODES = ("off", "warn", "strict")


@dataclass
class LoadConfig:
    # What to do when len(frame_data) != Frames x total channels: off|warn|strict
    frame_check: str = "warn"
    encoding: str = "utf-8"
    errors: str = "ignore"

    def __post_init__(self) -> None:
        if self.frame_check not in FRAME_CHECK_MODES:
            raise ValueError(
                f"frame_check must be one of {', '.join(FRAME_CHECK_MODES)}, got: {self.frame_check!r}"
            )
