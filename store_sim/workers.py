"""
Shared pool of store workers who fix self-checkout issues.
"""

import logging

logger = logging.getLogger(__name__)


class WorkerPool:
    """Fungible counter of free workers, shared by every lane."""

    def __init__(self, num_workers: int):
        """Initialize worker pool.

        Args:
            num_workers: workers on shift (>= 0)
        """
        if num_workers < 0:
            raise ValueError("num_workers must be >= 0")

        self.capacity = num_workers
        self.available = num_workers

    def acquire(self) -> bool:
        """Take one worker if any is free.

        Returns:
            True if a worker was taken, False (and no change) otherwise
        """
        if self.available <= 0:
            return False
        self.available -= 1
        return True

    def release(self):
        """Return one worker to the pool."""
        self.available += 1
        if self.available > self.capacity:
            logger.warning(
                "Worker pool above capacity: %d available, %d on shift",
                self.available,
                self.capacity,
            )

    @property
    def busy(self) -> int:
        return self.capacity - self.available
