"""Animation frame sampling and GIF export.

Each ``S`` (pause) signal from the executor advances a virtual clock by a
fixed 20 ms quantum.  Whenever the clock reaches the frame interval a
snapshot is taken and the interval is subtracted; the remainder carries
into the next frame rather than being discarded.  At most one frame is
taken per pause, even when the interval is shorter than the quantum.

Frames are written as an infinitely looping GIF, each frame shown for the
frame interval.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from cfrs.canvas.buffer import PixelBuffer
from cfrs.export.image import buffer_to_rgb
from cfrs.utils import fs

logger = logging.getLogger(__name__)

PAUSE_QUANTUM_MS = 20


class FrameSampler:
    """Accumulates virtual pause time and collects frames.

    Parameters
    ----------
    interval_ms : int
        Virtual time between captured frames (> 0).
    quantum_ms : int
        Virtual time contributed by one pause, default 20.

    Attributes
    ----------
    elapsed_ms : int
        Time accumulated since the last capture (always < interval after
        a capture, except when ``quantum_ms > interval_ms``).
    frames : list[np.ndarray]
        Captured ``(H, W, 3)`` uint8 frames, in order.
    """

    def __init__(self, interval_ms: int, quantum_ms: int = PAUSE_QUANTUM_MS) -> None:
        if interval_ms <= 0:
            raise ValueError(f"Frame interval must be positive, got {interval_ms} ms")
        self.interval_ms = interval_ms
        self.quantum_ms = quantum_ms
        self.elapsed_ms = 0
        self.frames: list[np.ndarray] = []

    def on_pause(self, buffer: PixelBuffer) -> bool:
        """Register one pause; capture *buffer* if the interval elapsed.

        Returns
        -------
        bool
            True if a frame was captured.
        """
        self.elapsed_ms += self.quantum_ms
        if self.elapsed_ms < self.interval_ms:
            return False

        self.elapsed_ms -= self.interval_ms
        self.frames.append(buffer_to_rgb(buffer))
        logger.debug("Captured frame %d", len(self.frames))
        return True


def save_gif_animation(
    frames: list[np.ndarray],
    path: str | Path,
    interval_ms: int,
) -> Path:
    """Write *frames* as a looping GIF, each shown for *interval_ms*.

    Raises
    ------
    ValueError
        If *frames* is empty.
    RuntimeError
        If the write fails.
    """
    if not frames:
        raise ValueError("Cannot write an animation with no frames")

    path = Path(path)
    fs.atomic_save_image(
        frames[0],
        path,
        pil_kwargs={"format": "GIF", "duration": interval_ms, "loop": 0},
        append_frames=frames[1:],
    )
    logger.info("Saved %d-frame animation to %s", len(frames), path)
    return path
