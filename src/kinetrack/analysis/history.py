"""Fixed-capacity frame history shared by all analyzers."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from kinetrack.core.types import MovementFrame

DEFAULT_CAPACITY = 120  # ~4 s at 30 fps


class FrameHistoryBuffer:
    """FIFO ring buffer of MovementFrame in arrival order.

    The oldest frame is evicted once capacity is exceeded. Frames are never
    reordered; analyzers get immutable snapshots via ``frames()``.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._frames: deque[MovementFrame] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Maximum number of retained frames."""
        return self._frames.maxlen or 0

    @property
    def latest(self) -> MovementFrame | None:
        """Most recently appended frame."""
        return self._frames[-1] if self._frames else None

    @property
    def is_full(self) -> bool:
        """True once the next append will evict the oldest frame."""
        return len(self._frames) == self.capacity

    def append(self, frame: MovementFrame) -> None:
        """Append a frame, evicting the oldest if at capacity."""
        self._frames.append(frame)

    def clear(self) -> None:
        """Drop all frames."""
        self._frames.clear()

    def frames(self) -> tuple[MovementFrame, ...]:
        """Chronological snapshot of the buffer contents."""
        return tuple(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[MovementFrame]:
        return iter(tuple(self._frames))
