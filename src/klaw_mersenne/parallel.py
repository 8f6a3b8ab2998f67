"""Independent generators for concurrent tasks.

Instead of sharing one generator, each task owns its own Rand seeded with
base_seed + task index. Distinct seeds keep the streams apart; choosing a
base seed that does not collide with other runs is up to the caller.

Example:
    ```python
    async def simulate(index: int, rand: Rand) -> float:
        return sum(rand.gaussian_f64() for _ in range(1000))

    totals = await run_tasks(simulate, 8, base_seed=1234, limit=4)
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import aiologic
import anyio

from klaw_mersenne._config import FROM_CONFIG
from klaw_mersenne._logging import get_logger
from klaw_mersenne._wrapping import wrapping_add
from klaw_mersenne.distributions import Rand
from klaw_mersenne.errors import InvalidArgumentError
from klaw_mersenne.generator import seed_from_time

__all__ = ['derive_seed', 'run_tasks', 'spawn']

logger = get_logger(__name__)


def derive_seed(base_seed: int, offset: int) -> int:
    """Seed for the task at offset, wrapping modulo 2**32."""
    return wrapping_add(base_seed, offset)


def spawn(
    count: int,
    base_seed: int | None = None,
    *,
    byte_limit: int | None | object = FROM_CONFIG,
) -> list[Rand]:
    """Create count independent generators seeded base_seed, base_seed + 1, ...

    Args:
        count: Number of generators.
        base_seed: First seed. Defaults to seed_from_time().
        byte_limit: Passed to each Rand.

    Returns:
        The generators, in offset order.

    Raises:
        InvalidArgumentError: If count is negative.
    """
    if count < 0:
        raise InvalidArgumentError('count', f'must be non-negative, got {count}')
    if base_seed is None:
        base_seed = seed_from_time()
    logger.debug('spawning generators', count=count, base_seed=base_seed)
    return [Rand(derive_seed(base_seed, i), byte_limit=byte_limit) for i in range(count)]


async def run_tasks[T](
    func: Callable[[int, Rand], Awaitable[T]],
    count: int,
    *,
    base_seed: int | None = None,
    limit: int | None = None,
    byte_limit: int | None | object = FROM_CONFIG,
) -> list[T]:
    """Run func(index, rand) for each index, each call owning its own generator.

    Args:
        func: Async function receiving the task index and its Rand.
        count: Number of tasks.
        base_seed: First seed; task i uses derive_seed(base_seed, i).
        limit: Maximum number of tasks running at once. None means unlimited.
        byte_limit: Passed to each task's Rand.

    Returns:
        The results in index order.

    Raises:
        InvalidArgumentError: If count is negative or limit is not positive.
    """
    if limit is not None and limit <= 0:
        raise InvalidArgumentError('limit', f'must be positive, got {limit}')

    rands = spawn(count, base_seed, byte_limit=byte_limit)
    results: list[T | None] = [None] * count
    limiter = aiologic.CapacityLimiter(limit) if limit is not None else None

    async with anyio.create_task_group() as tg:

        async def run_one(i: int, rand: Rand) -> None:
            if limiter is None:
                results[i] = await func(i, rand)
                return
            async with limiter:
                results[i] = await func(i, rand)

        for i, rand in enumerate(rands):
            tg.start_soon(run_one, i, rand)

    return results  # type: ignore[return-value]
