"""klaw-mersenne: MT19937 pseudo-random numbers for the Klaw ecosystem.

Deterministic, seedable generation of 32/64-bit integers, byte streams,
uniform and Gaussian floats. Not suitable for cryptography: the generator's
state can be recovered from its output.

Flat imports (preferred):
    from klaw_mersenne import Rand, MersenneTwister, SharedRand, spawn

Submodule imports (for organization):
    from klaw_mersenne.generator import MersenneTwister, temper
    from klaw_mersenne.distributions import Rand
    from klaw_mersenne.shared import SharedRand
    from klaw_mersenne.parallel import spawn, run_tasks
"""

from klaw_mersenne._config import DEFAULT_BYTE_LIMIT, RandConfig, get_config, init, reset_config
from klaw_mersenne._logging import add_log_hook, clear_log_hooks, configure_logging, get_logger, remove_log_hook
from klaw_mersenne.distributions import Rand
from klaw_mersenne.errors import (
    GeneratorStateError,
    InvalidArgument,
    InvalidArgumentError,
    ResourceLimitExceeded,
    ResourceLimitExceededError,
)
from klaw_mersenne.generator import (
    DEFAULT_SEED,
    GeneratorState,
    MersenneTwister,
    seed_from_time,
    seed_state,
    temper,
)
from klaw_mersenne.parallel import derive_seed, run_tasks, spawn
from klaw_mersenne.shared import SharedRand

__all__ = [
    # Config
    'DEFAULT_BYTE_LIMIT',
    # Generator
    'DEFAULT_SEED',
    # Errors - exception variants
    'GeneratorStateError',
    'GeneratorState',
    # Errors - struct variants
    'InvalidArgument',
    'InvalidArgumentError',
    'MersenneTwister',
    # Distributions
    'Rand',
    'RandConfig',
    'ResourceLimitExceeded',
    'ResourceLimitExceededError',
    # Concurrency
    'SharedRand',
    # Logging
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'derive_seed',
    'get_config',
    'get_logger',
    'init',
    'remove_log_hook',
    'reset_config',
    'run_tasks',
    'seed_from_time',
    'seed_state',
    'spawn',
    'temper',
]
