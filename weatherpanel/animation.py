"""Frames of three colour planes and looping animation scenes."""

from __future__ import annotations

from dataclasses import dataclass, field

ROWS = 16
MAX_FRAMES = 2


def _blank_plane() -> list[int]:
    return [0] * ROWS


@dataclass
class Frame:
    """One 16x16 picture held as red, green and blue bit planes, one int per row."""

    red: list[int] = field(default_factory=_blank_plane)
    green: list[int] = field(default_factory=_blank_plane)
    blue: list[int] = field(default_factory=_blank_plane)

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            plane = getattr(self, name)
            if len(plane) != ROWS:
                raise ValueError(f"{name} plane must have {ROWS} rows, got {len(plane)}")
            setattr(self, name, list(plane))

    def copy(self) -> Frame:
        """Return an independent copy of this frame."""
        return Frame(list(self.red), list(self.green), list(self.blue))


@dataclass
class Scene:
    """A short looping sequence of frames shown at a fixed refresh rate."""

    frames: list[Frame] = field(default_factory=lambda: [Frame()])
    refresh_rate_ms: int = 0
    current_frame: int = 0

    def __post_init__(self) -> None:
        if not self.frames:
            raise ValueError("a scene needs at least one frame")
        if len(self.frames) > MAX_FRAMES:
            raise ValueError(f"a scene holds at most {MAX_FRAMES} frames")
        if not 0 <= self.current_frame < len(self.frames):
            raise ValueError("current_frame is out of range")

    @property
    def num_frames(self) -> int:
        return len(self.frames)

    def next_frame(self) -> tuple[Frame, int]:
        """Return a copy of the current frame and the refresh rate, then advance."""
        frame = self.frames[self.current_frame].copy()
        self.current_frame += 1
        if self.current_frame >= self.num_frames:
            self.current_frame = 0
        return frame, self.refresh_rate_ms