"""MT19937 bit generator.

Holds 624 words of state and yields one tempered 32-bit word per draw,
regenerating ("twisting") the whole state every 624 draws.

Thread Safety:
    A MersenneTwister is NOT safe to share between threads or tasks. Wrap it
    in klaw_mersenne.shared.SharedRand, or give each task its own instance
    (klaw_mersenne.parallel.spawn).

Example:
    >>> gen = MersenneTwister(5489)
    >>> gen.next_uint32()
    3499211612
"""

from __future__ import annotations

import time
from collections.abc import Iterator

import msgspec

from klaw_mersenne._logging import get_logger
from klaw_mersenne._wrapping import MASK32, discard_multiply, wrapping_add
from klaw_mersenne.errors import GeneratorStateError, InvalidArgumentError

__all__ = [
    'DEFAULT_SEED',
    'GeneratorState',
    'MersenneTwister',
    'seed_from_time',
    'seed_state',
    'temper',
]

# MT19937 parameters
W, N, M, R = 32, 624, 397, 31
A = 0x9908B0DF
U, D = 11, 0xFFFFFFFF
S, B = 7, 0x9D2C5680
T, C = 15, 0xEFC60000
L = 18
F = 1812433253

UPPER_MASK = (MASK32 << R) & MASK32
LOWER_MASK = (1 << R) - 1

DEFAULT_SEED = 5489

logger = get_logger(__name__)


class GeneratorState(msgspec.Struct, frozen=True):
    """Snapshot of a generator: the 624 state words and the read cursor."""

    words: tuple[int, ...]
    index: int


def _is_word(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MASK32


def seed_state(seed: int) -> list[int]:
    """Expand a 32-bit seed into the raw (untwisted) 624-word state.

    Args:
        seed: Unsigned 32-bit seed.

    Returns:
        The 624 state words produced by the MT19937 initialisation recurrence.

    Raises:
        InvalidArgumentError: If seed is not an integer in [0, 2**32).
    """
    if not _is_word(seed):
        raise InvalidArgumentError('seed', f'expected an integer in [0, 2**32), got {seed!r}')

    state = [0] * N
    state[0] = seed
    for i in range(1, N):
        prev = state[i - 1]
        state[i] = wrapping_add(discard_multiply(F, prev ^ (prev >> (W - 2))), i)
    return state


def temper(y: int) -> int:
    """Apply the MT19937 tempering transform to one state word."""
    y ^= (y >> U) & D
    y ^= (y << S) & B
    y ^= (y << T) & C
    y ^= y >> L
    return y


def seed_from_time() -> int:
    """Derive a seed from the wall clock, truncated to 32 bits.

    Note:
        Wraps around in February 2106, and generators seeded within the same
        second receive the same seed.
    """
    return int(time.time()) & MASK32


class MersenneTwister:
    """MT19937 pseudo-random bit generator.

    Iterating a generator yields next_uint32() forever.

    Example:
        >>> gen = MersenneTwister(42)
        >>> first = gen.next_uint32()
        >>> gen.seed(42)
        >>> gen.next_uint32() == first
        True
    """

    __slots__ = ('_index', '_state')

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        """Create a generator.

        Args:
            seed: Unsigned 32-bit seed. Prefer an unpredictable value; the
                default reproduces the reference MT19937 sequence.
        """
        self._state: list[int] = []
        self._index = N
        self.seed(seed)

    @classmethod
    def from_time(cls) -> MersenneTwister:
        """Create a generator seeded from the wall clock (see seed_from_time())."""
        seed = seed_from_time()
        logger.info('seeding generator from clock', seed=seed)
        return cls(seed)

    def seed(self, seed: int) -> None:
        """Reinitialise the state from a 32-bit seed.

        The expanded state is twisted straight away, leaving the cursor at 0.

        Raises:
            InvalidArgumentError: If seed is not an integer in [0, 2**32).
        """
        self._state = seed_state(seed)
        self._twist()
        logger.debug('generator seeded', seed=seed)

    def _twist(self) -> None:
        # In place: for i >= N - M, state[(i + M) % N] already holds this pass's value.
        state = self._state
        for i in range(N):
            y = (state[i] & UPPER_MASK) | (state[(i + 1) % N] & LOWER_MASK)
            state[i] = state[(i + M) % N] ^ (y >> 1) ^ (A if y & 1 else 0)
        self._index = 0

    def next_uint32(self) -> int:
        """Return the next tempered 32-bit word.

        Raises:
            GeneratorStateError: If the cursor was corrupted. Never raised
                under normal use.
        """
        index = self._index
        if not 0 <= index <= N:
            logger.critical('generator cursor out of range', index=index, size=N)
            raise GeneratorStateError(index, N)
        if index == N:
            self._twist()
            index = 0

        self._index = index + 1
        return temper(self._state[index])

    def getstate(self) -> GeneratorState:
        """Snapshot the current state."""
        return GeneratorState(words=tuple(self._state), index=self._index)

    def setstate(self, state: GeneratorState) -> None:
        """Restore a snapshot taken with getstate().

        Raises:
            InvalidArgumentError: If the snapshot does not hold 624 32-bit words
                and a cursor in [0, 624].
        """
        if len(state.words) != N:
            raise InvalidArgumentError('state', f'expected {N} words, got {len(state.words)}')
        if not all(_is_word(word) for word in state.words):
            raise InvalidArgumentError('state', 'words must be integers in [0, 2**32)')
        if isinstance(state.index, bool) or not isinstance(state.index, int) or not 0 <= state.index <= N:
            raise InvalidArgumentError('state', f'index must be in [0, {N}], got {state.index!r}')

        self._state = list(state.words)
        self._index = state.index
        logger.debug('generator state restored', index=state.index)

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.next_uint32()
