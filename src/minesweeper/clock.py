"""
Elapsed-time tracking for a game.

The clock owns no timer. The caller feeds monotonic milliseconds through
``tick`` at whatever cadence it likes (once per second is enough for a
seconds display).
"""
from dataclasses import dataclass


@dataclass
class Clock:
    """
    Passive game clock.

    Attributes:
        time: Last monotonic time fed in, in milliseconds.
        start_time: Value of ``time`` when the game started.
        seconds: Whole seconds elapsed since ``start_time``.
        running: Whether the clock is counting.
    """

    time: int = 0
    start_time: int = 0
    seconds: int = 0
    running: bool = False

    def start(self) -> None:
        """Start counting from the last ticked time."""
        self.seconds = 0
        self.start_time = self.time
        self.running = True

    def stop(self) -> None:
        """Freeze ``seconds`` at its current value."""
        self.running = False

    def tick(self, time_millis: int) -> bool:
        """
        Record the current time and refresh ``seconds`` while running.

        Args:
            time_millis: Current monotonic time in milliseconds.

        Returns:
            True if ``seconds`` changed.
        """
        self.time = time_millis
        if not self.running:
            return False
        seconds = (self.time - self.start_time) // 1000
        if seconds == self.seconds:
            return False
        self.seconds = seconds
        return True
