from __future__ import annotations

import random
import threading

from core.logger import AppLogger
from midi.errors import RandomVelocityError
from midi.values import FULL_VELOCITY, ZERO_VELOCITY, Velocity


class VelocityRandomizer:
    """Draws random note velocities from one owned random generator.

    The plain methods touch the generator directly and are only safe from a
    single thread.  The ``safe_`` methods hold a lock for the duration of one
    draw so a randomizer can be shared between threads.
    """

    def __init__(self, rng: random.Random | None = None,
                 logger: AppLogger | None = None) -> None:
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._logger = logger

    def random_velocity_in_range(self, minimum: int, maximum: int) -> Velocity:
        """Return a velocity between minimum and maximum, inclusive. Not thread-safe."""
        low, high = int(minimum), int(maximum)
        if low > high:
            raise RandomVelocityError(
                f"minimum velocity ({low}) cannot be greater than maximum velocity ({high})"
            )
        if low == high:
            velocity = Velocity(low)
        else:
            velocity = Velocity(self._rng.randint(low, high))
        if self._logger is not None:
            self._logger.random(f"velocity {int(velocity)} from range {low}-{high}")
        return velocity

    def random_velocity(self) -> Velocity:
        return self.random_velocity_in_range(ZERO_VELOCITY, FULL_VELOCITY)

    def safe_random_velocity_in_range(self, minimum: int, maximum: int) -> Velocity:
        with self._lock:
            return self.random_velocity_in_range(minimum, maximum)

    def safe_random_velocity(self) -> Velocity:
        with self._lock:
            return self.random_velocity()
