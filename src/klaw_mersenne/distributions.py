"""Distribution layer: wide integers, byte streams, uniform and Gaussian samples.

Every draw is a pure function of the words pulled from the underlying
MersenneTwister; Rand keeps no other hidden state.

Float (32-bit) variants compute in numpy.float32 from start to finish and
return numpy.float32. Double (64-bit) variants use Python floats.

Usage:
    >>> rand = Rand(5489)
    >>> rand.next_uint32()
    3499211612
    >>> 0.0 <= rand.uniform_f64() < 1.0
    True
    >>> len(rand.next_bytes(10))
    10
"""

from __future__ import annotations

import math
import operator
import struct

import numpy as np

from klaw_mersenne._config import FROM_CONFIG, check_byte_limit, get_config
from klaw_mersenne._logging import get_logger
from klaw_mersenne.errors import InvalidArgument, ResourceLimitExceeded
from klaw_mersenne.generator import DEFAULT_SEED, GeneratorState, MersenneTwister, seed_from_time

__all__ = ['Rand']

_F64_SCALE = 2.0**-53
_F32_SCALE = np.float32(2.0**-24)
_F32_ONE = np.float32(1.0)
_F32_MINUS_TWO = np.float32(-2.0)
_F32_TWO_PI = np.float32(2.0 * math.pi)

logger = get_logger(__name__)


class Rand:
    """Random values derived from one MT19937 generator.

    Not thread-safe; see klaw_mersenne.shared.SharedRand for a locked wrapper.

    Example:
        >>> rand = Rand(seed=12345)
        >>> value = rand.gaussian_f64(mean=10.0, sigma=2.0)
        >>> isinstance(value, float)
        True
    """

    __slots__ = ('_byte_limit', '_gen')

    def __init__(self, seed: int = DEFAULT_SEED, *, byte_limit: int | None | object = FROM_CONFIG) -> None:
        """Create a Rand with its own generator.

        Args:
            seed: Unsigned 32-bit seed.
            byte_limit: Largest buffer next_bytes() may return; None removes
                the cap. Defaults to the process configuration.

        Raises:
            InvalidArgumentError: If seed or byte_limit is out of range.
        """
        self._setup(MersenneTwister(seed), byte_limit)

    @classmethod
    def from_time(cls, *, byte_limit: int | None | object = FROM_CONFIG) -> Rand:
        """Create a Rand seeded from the wall clock."""
        seed = seed_from_time()
        logger.info('seeding generator from clock', seed=seed)
        return cls(seed, byte_limit=byte_limit)

    @classmethod
    def from_generator(cls, generator: MersenneTwister, *, byte_limit: int | None | object = FROM_CONFIG) -> Rand:
        """Wrap an existing generator. The Rand takes over its state."""
        rand = cls.__new__(cls)
        rand._setup(generator, byte_limit)
        return rand

    def _setup(self, generator: MersenneTwister, byte_limit: int | None | object) -> None:
        if byte_limit is FROM_CONFIG:
            byte_limit = get_config().byte_limit
        self._byte_limit = check_byte_limit(byte_limit)
        self._gen = generator

    @property
    def generator(self) -> MersenneTwister:
        """The underlying bit generator."""
        return self._gen

    @property
    def byte_limit(self) -> int | None:
        """Largest buffer next_bytes() may return, or None if uncapped."""
        return self._byte_limit

    # --- State ---

    def seed(self, seed: int) -> None:
        """Reseed the underlying generator."""
        self._gen.seed(seed)

    def getstate(self) -> GeneratorState:
        """Snapshot the underlying generator."""
        return self._gen.getstate()

    def setstate(self, state: GeneratorState) -> None:
        """Restore a snapshot taken with getstate()."""
        self._gen.setstate(state)

    # --- Integers ---

    def next_uint32(self) -> int:
        """Return one raw 32-bit word."""
        return self._gen.next_uint32()

    def next_uint64(self) -> int:
        """Return a 64-bit integer built from two words, high word drawn first."""
        hi = self._gen.next_uint32()
        lo = self._gen.next_uint32()
        return (hi << 32) | lo

    # --- Bytes ---

    @staticmethod
    def _as_length(length: int) -> int:
        # Any __index__ integer (numpy included), but not bool
        if isinstance(length, bool):
            msg = 'length must be an int, got bool'
            raise TypeError(msg)
        return operator.index(length)

    def _check_length(self, length: int) -> InvalidArgument | ResourceLimitExceeded | None:
        if length <= 0:
            return InvalidArgument('length', f'must be positive, got {length}')
        if self._byte_limit is not None and length > self._byte_limit:
            return ResourceLimitExceeded(length, self._byte_limit)
        return None

    def _fill(self, length: int) -> bytes:
        whole, tail = divmod(length, 4)
        next_word = self._gen.next_uint32
        out = struct.pack(f'>{whole}I', *[next_word() for _ in range(whole)])
        if tail:
            out += next_word().to_bytes(4, 'big')[:tail]
        return out

    def next_bytes(self, length: int) -> bytes:
        """Return length pseudo-random bytes.

        Complete words are written big-endian. When length is not a multiple
        of four, one more word is drawn and its leading bytes fill the tail.

        Args:
            length: Number of bytes, in [1, byte_limit].

        Returns:
            Exactly length bytes.

        Raises:
            InvalidArgumentError: If length <= 0.
            ResourceLimitExceededError: If length exceeds byte_limit.
            TypeError: If length is not an int.
        """
        length = self._as_length(length)
        problem = self._check_length(length)
        if problem is not None:
            logger.debug('byte request rejected', length=length, reason=type(problem).__name__)
            raise problem.to_exception()
        return self._fill(length)

    def try_next_bytes(self, length: int) -> bytes | InvalidArgument | ResourceLimitExceeded:
        """Like next_bytes(), but return the error struct instead of raising.

        Returns:
            The bytes, or InvalidArgument / ResourceLimitExceeded. No words are
            drawn when the request is rejected.
        """
        length = self._as_length(length)
        problem = self._check_length(length)
        if problem is not None:
            logger.debug('byte request rejected', length=length, reason=type(problem).__name__)
            return problem
        return self._fill(length)

    # --- Uniform ---

    def uniform_f64(self, lower: float = 0.0, upper: float = 1.0) -> float:
        """Return a double in [lower, upper).

        Uses the top 53 bits of one next_uint64() draw. upper <= lower is
        allowed and yields the mirrored (or empty-width) range.
        """
        lower = float(lower)
        upper = float(upper)
        f = (self.next_uint64() >> 11) * _F64_SCALE
        value = f * (upper - lower) + lower
        # Rounding can land on upper itself
        if upper > lower and value >= upper:
            return math.nextafter(upper, lower)
        return value

    def uniform_f32(self, lower: float = 0.0, upper: float = 1.0) -> np.float32:
        """Return a float32 in [lower, upper).

        Uses the top 24 bits of one next_uint32() draw.
        """
        lower32 = np.float32(lower)
        upper32 = np.float32(upper)
        f = np.float32(self._gen.next_uint32() >> 8) * _F32_SCALE
        value = f * (upper32 - lower32) + lower32
        if upper32 > lower32 and value >= upper32:
            return np.nextafter(upper32, lower32)
        return value

    # --- Gaussian ---

    def gaussian_f64(self, mean: float = 0.0, sigma: float = 1.0) -> float:
        """Return a normally distributed double (Box-Muller, cosine branch).

        A = 1 - U lies in (0, 1], so log(A) is always finite. The sine
        companion sample is discarded.
        """
        a = 1.0 - self.uniform_f64()
        b = self.uniform_f64()
        x = math.sqrt(-2.0 * math.log(a)) * math.cos(2.0 * math.pi * b)
        return x * sigma + mean

    def gaussian_f32(self, mean: float = 0.0, sigma: float = 1.0) -> np.float32:
        """Return a normally distributed float32, computed in float32 throughout."""
        a = _F32_ONE - self.uniform_f32()
        b = self.uniform_f32()
        x = np.sqrt(_F32_MINUS_TWO * np.log(a)) * np.cos(_F32_TWO_PI * b)
        return x * np.float32(sigma) + np.float32(mean)
