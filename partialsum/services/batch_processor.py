"""Order-preserving parallel map over independent work items.

# FILE_CONTEXT: Fan-out used by both generate and verify
# ROLE: Runs one blocking per-item function across a bounded thread pool
# CONCURRENCY: Items share no state; only the progress observer is touched
#   from several workers at once and must be safe for concurrent advance()
# ORDERING: Results come back positionally aligned with the input, whatever
#   order the workers finish in (asyncio.gather over indexed futures)
"""

import asyncio
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Generic, Protocol, Sequence, TypeVar

from loguru import logger

T = TypeVar("T")
R = TypeVar("R")

# Sampling is blocking I/O, so threads outnumbering cores is fine,
# but cap the pool to avoid thrashing a single spinning disk
SAFE_MAX_WORKERS = 32

# Fallback CPU count when os.cpu_count() returns None
DEFAULT_CPU_COUNT = 4


class ProgressObserver(Protocol):
    """Receives one tick per completed item."""

    def advance(self, amount: int = 1) -> None: ...


class ProgressCounter:
    """Thread-safe monotonically increasing completion counter."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    def advance(self, amount: int = 1) -> None:
        with self._lock:
            self._count += amount

    @property
    def count(self) -> int:
        with self._lock:
            return self._count


@dataclass
class ItemResult(Generic[T, R]):
    """Outcome of applying the mapping function to one item."""

    item: T
    value: R | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def calculate_worker_count(
    item_count: int, cpu_count: int | None = None, max_workers: int = 0
) -> int:
    """Pick a pool size for the given workload.

    Args:
        item_count: Number of items to process
        cpu_count: Available cores (detected when None)
        max_workers: Explicit cap; 0 means automatic

    Returns:
        Worker count, at least 1
    """
    cpu_count = cpu_count or os.cpu_count() or DEFAULT_CPU_COUNT
    workers = min(cpu_count, SAFE_MAX_WORKERS, max(item_count, 1))
    if max_workers > 0:
        workers = min(workers, max_workers)
    return max(1, workers)


class ParallelExecutor:
    """Applies a per-item function to a sequence of items in parallel."""

    def __init__(self, max_workers: int = 0, progress: ProgressObserver | None = None):
        """Initialize executor.

        Args:
            max_workers: Upper bound on pool size (0 = automatic)
            progress: Optional observer ticked once per completed item
        """
        self.max_workers = max_workers
        self.progress = progress

    def _run_one(self, fn: Callable[[T], R], item: T) -> ItemResult[T, R]:
        try:
            result: ItemResult[T, R] = ItemResult(item=item, value=fn(item))
        except Exception as e:
            # Reported per item; one failure never aborts the run
            result = ItemResult(item=item, error=e)
        if self.progress is not None:
            self.progress.advance(1)
        return result

    async def map(
        self, fn: Callable[[T], R], items: Sequence[T]
    ) -> list[ItemResult[T, R]]:
        """Run ``fn`` over ``items`` and return results in input order."""
        if not items:
            return []

        num_workers = calculate_worker_count(len(items), max_workers=self.max_workers)
        logger.debug(f"Processing {len(items)} items with {num_workers} workers")

        loop = asyncio.get_running_loop()
        with ThreadPoolExecutor(
            max_workers=num_workers, thread_name_prefix="partialsum"
        ) as executor:
            futures = [
                loop.run_in_executor(executor, self._run_one, fn, item)
                for item in items
            ]
            return list(await asyncio.gather(*futures))
