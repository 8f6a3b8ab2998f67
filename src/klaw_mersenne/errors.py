"""Generator error types: dual struct+exception for value-returning and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'GeneratorStateError',
    'InvalidArgument',
    'InvalidArgumentError',
    'ResourceLimitExceeded',
    'ResourceLimitExceededError',
]


# --- Caller Errors ---


class InvalidArgument(msgspec.Struct, frozen=True, gc=False):
    """Argument rejected - struct variant for try_* draws."""

    argument: str
    message: str

    def to_exception(self) -> InvalidArgumentError:
        """Convert to exception for raise-based code."""
        return InvalidArgumentError(self.argument, self.message)


class InvalidArgumentError(ValueError):
    """Argument rejected - exception variant."""

    def __init__(self, argument: str, message: str) -> None:
        self.argument = argument
        self.message = message
        super().__init__(f'Invalid {argument}: {message}')

    def to_struct(self) -> InvalidArgument:
        """Convert to struct for value-returning code."""
        return InvalidArgument(self.argument, self.message)


class ResourceLimitExceeded(msgspec.Struct, frozen=True, gc=False):
    """Byte request above the configured cap - struct variant."""

    requested: int
    limit: int

    def to_exception(self) -> ResourceLimitExceededError:
        """Convert to exception for raise-based code."""
        return ResourceLimitExceededError(self.requested, self.limit)


class ResourceLimitExceededError(ValueError):
    """Byte request above the configured cap - exception variant."""

    def __init__(self, requested: int, limit: int) -> None:
        self.requested = requested
        self.limit = limit
        super().__init__(f'Requested {requested} bytes, limit is {limit}')

    def to_struct(self) -> ResourceLimitExceeded:
        """Convert to struct for value-returning code."""
        return ResourceLimitExceeded(self.requested, self.limit)


# --- Internal Errors ---


class GeneratorStateError(RuntimeError):
    """Generator cursor left its valid range.

    Raised only when the generator's own bookkeeping is broken. There is no
    struct variant: callers are not expected to recover from it.
    """

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f'Generator cursor {index} outside [0, {size}]')
