"""One generator shared behind a serialized lane.

SharedRand guards a single Rand with an aiologic.Lock, which works from
threads and from async tasks alike. Every draw, reseed and snapshot goes
through the same lock, so interleaved callers see one consistent sequence.

Example:
    ```python
    shared = SharedRand(seed=2024)

    # From threads
    with ThreadPoolExecutor() as pool:
        words = list(pool.map(lambda _: shared.next_uint32(), range(100)))

    # From async tasks
    value = await shared.uniform_f64_async(-1.0, 1.0)
    ```
"""

from __future__ import annotations

from collections.abc import Callable

import aiologic
import numpy as np

from klaw_mersenne._config import FROM_CONFIG
from klaw_mersenne._logging import get_logger
from klaw_mersenne.distributions import Rand
from klaw_mersenne.errors import InvalidArgument, ResourceLimitExceeded
from klaw_mersenne.generator import DEFAULT_SEED, GeneratorState, seed_from_time

__all__ = ['SharedRand']

logger = get_logger(__name__)


class SharedRand:
    """Thread-safe and async-safe access to one Rand.

    Replaces a process-wide default generator: create one, pass it to the
    code that needs it.
    """

    __slots__ = ('_lock', '_rand')

    def __init__(self, seed: int = DEFAULT_SEED, *, byte_limit: int | None | object = FROM_CONFIG) -> None:
        self._lock = aiologic.Lock()
        self._rand = Rand(seed, byte_limit=byte_limit)

    @classmethod
    def from_time(cls, *, byte_limit: int | None | object = FROM_CONFIG) -> SharedRand:
        """Create a SharedRand seeded from the wall clock."""
        seed = seed_from_time()
        logger.info('seeding shared generator from clock', seed=seed)
        return cls(seed, byte_limit=byte_limit)

    def _call[T](self, method: Callable[..., T], *args: object) -> T:
        with self._lock:
            return method(*args)

    async def _call_async[T](self, method: Callable[..., T], *args: object) -> T:
        async with self._lock:
            return method(*args)

    # --- State ---

    def seed(self, seed: int) -> None:
        """Reseed under the lock."""
        self._call(self._rand.seed, seed)

    def reseed_from_time(self) -> int:
        """Reseed from the wall clock under the lock.

        Returns:
            The seed that was used.
        """
        seed = seed_from_time()
        self._call(self._rand.seed, seed)
        logger.info('reseeded shared generator from clock', seed=seed)
        return seed

    def getstate(self) -> GeneratorState:
        return self._call(self._rand.getstate)

    def setstate(self, state: GeneratorState) -> None:
        self._call(self._rand.setstate, state)

    # --- Sync draws ---

    def next_uint32(self) -> int:
        return self._call(self._rand.next_uint32)

    def next_uint64(self) -> int:
        return self._call(self._rand.next_uint64)

    def next_bytes(self, length: int) -> bytes:
        return self._call(self._rand.next_bytes, length)

    def try_next_bytes(self, length: int) -> bytes | InvalidArgument | ResourceLimitExceeded:
        return self._call(self._rand.try_next_bytes, length)

    def uniform_f32(self, lower: float = 0.0, upper: float = 1.0) -> np.float32:
        return self._call(self._rand.uniform_f32, lower, upper)

    def uniform_f64(self, lower: float = 0.0, upper: float = 1.0) -> float:
        return self._call(self._rand.uniform_f64, lower, upper)

    def gaussian_f32(self, mean: float = 0.0, sigma: float = 1.0) -> np.float32:
        return self._call(self._rand.gaussian_f32, mean, sigma)

    def gaussian_f64(self, mean: float = 0.0, sigma: float = 1.0) -> float:
        return self._call(self._rand.gaussian_f64, mean, sigma)

    # --- Async draws ---

    async def next_uint32_async(self) -> int:
        return await self._call_async(self._rand.next_uint32)

    async def next_uint64_async(self) -> int:
        return await self._call_async(self._rand.next_uint64)

    async def next_bytes_async(self, length: int) -> bytes:
        return await self._call_async(self._rand.next_bytes, length)

    async def try_next_bytes_async(self, length: int) -> bytes | InvalidArgument | ResourceLimitExceeded:
        return await self._call_async(self._rand.try_next_bytes, length)

    async def uniform_f32_async(self, lower: float = 0.0, upper: float = 1.0) -> np.float32:
        return await self._call_async(self._rand.uniform_f32, lower, upper)

    async def uniform_f64_async(self, lower: float = 0.0, upper: float = 1.0) -> float:
        return await self._call_async(self._rand.uniform_f64, lower, upper)

    async def gaussian_f32_async(self, mean: float = 0.0, sigma: float = 1.0) -> np.float32:
        return await self._call_async(self._rand.gaussian_f32, mean, sigma)

    async def gaussian_f64_async(self, mean: float = 0.0, sigma: float = 1.0) -> float:
        return await self._call_async(self._rand.gaussian_f64, mean, sigma)
