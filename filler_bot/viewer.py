"""Optional live board viewer.

The turn loop publishes a full board snapshot after every board update; a
daemon thread renders the most recent one with pygame. The channel is a
single slot: publishing replaces whatever the renderer has not picked up
yet, so stale snapshots are silently superseded and the turn loop never
waits on rendering.

Nothing here can stop the bot from playing. If pygame is not installed or no
display is available the render thread logs the failure and exits, and
further ``publish`` calls are cheap no-ops in effect.
"""

from __future__ import annotations

import logging
import threading
from typing import NamedTuple, Sequence

from .errors import ViewerError

logger = logging.getLogger(__name__)

WINDOW_SIZE = 1000
WINDOW_TITLE = "Filler Game Visualizer"
FRAMES_PER_SECOND = 60

BACKGROUND_COLOR = (240, 240, 240)
BORDER_COLOR = (64, 64, 64)
EMPTY_COLOR = (200, 200, 200)
PLAYER1_TERRITORY = (255, 100, 100)
PLAYER1_RECENT = (255, 50, 50)
PLAYER2_TERRITORY = (100, 100, 255)
PLAYER2_RECENT = (50, 50, 255)

CELL_COLORS = {
    ".": EMPTY_COLOR,
    "@": PLAYER1_TERRITORY,
    "a": PLAYER1_RECENT,
    "$": PLAYER2_TERRITORY,
    "s": PLAYER2_RECENT,
}


class BoardSnapshot(NamedTuple):
    width: int
    height: int
    rows: tuple[str, ...]


def cell_color(symbol: str) -> tuple[int, int, int]:
    """Fill colour for a board symbol; unknown symbols render as empty."""
    return CELL_COLORS.get(symbol, EMPTY_COLOR)


def cell_rect(
    col: int, row: int, snapshot: BoardSnapshot, window_size: int = WINDOW_SIZE
) -> tuple[int, int, int, int]:
    """Outer ``(x, y, w, h)`` of a cell when the board fills the window."""
    cell_width = window_size / max(1, snapshot.width)
    cell_height = window_size / max(1, snapshot.height)
    return (
        int(col * cell_width),
        int(row * cell_height),
        int(cell_width),
        int(cell_height),
    )


class SnapshotSlot:
    """Single-slot, latest-wins hand-off between two threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot: BoardSnapshot | None = None

    def put(self, snapshot: BoardSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def take(self) -> BoardSnapshot | None:
        """Return and clear the pending snapshot without blocking.

        Returns ``None`` when nothing new was published or the publisher
        currently holds the lock; the next frame will pick it up.
        """
        if not self._lock.acquire(blocking=False):
            return None
        try:
            snapshot, self._snapshot = self._snapshot, None
            return snapshot
        finally:
            self._lock.release()


class BoardViewer:
    """Renders published boards in a pygame window on a daemon thread."""

    def __init__(
        self,
        window_size: int = WINDOW_SIZE,
        fps: int = FRAMES_PER_SECOND,
    ) -> None:
        self.window_size = window_size
        self.fps = fps
        self.slot = SnapshotSlot()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def publish(self, width: int, height: int, rows: Sequence[str]) -> None:
        """Offer a board for display; never blocks on rendering."""
        self.slot.put(BoardSnapshot(width, height, tuple(rows)))

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="filler-viewer", daemon=True
        )
        self._thread.start()

    def close(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        try:
            self._render_loop()
        except ViewerError as e:
            logger.warning(f"Board viewer stopped: {e}")

    def _render_loop(self) -> None:
        try:
            import pygame
        except ImportError as e:
            raise ViewerError(
                "pygame is not installed; install the 'viewer' extra"
            ) from e

        try:
            pygame.init()
            screen = pygame.display.set_mode((self.window_size, self.window_size))
            pygame.display.set_caption(WINDOW_TITLE)
        except pygame.error as e:
            raise ViewerError(f"Failed to create visualizer: {e}") from e

        clock = pygame.time.Clock()
        try:
            while not self._stop.is_set():
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._stop.set()

                snapshot = self.slot.take()
                if snapshot is not None:
                    try:
                        self._draw(pygame, screen, snapshot)
                    except pygame.error as e:
                        logger.warning(f"Failed to render board: {e}")

                clock.tick(self.fps)
        finally:
            pygame.quit()

    def _draw(self, pygame, screen, snapshot: BoardSnapshot) -> None:
        screen.fill(BACKGROUND_COLOR)
        for row_idx, row in enumerate(snapshot.rows):
            for col_idx, symbol in enumerate(row):
                x, y, w, h = cell_rect(col_idx, row_idx, snapshot, self.window_size)
                if w > 2 and h > 2:
                    pygame.draw.rect(
                        screen, cell_color(symbol), pygame.Rect(x + 1, y + 1, w - 2, h - 2)
                    )
                pygame.draw.rect(screen, BORDER_COLOR, pygame.Rect(x, y, w, h), 1)
        pygame.display.flip()
