"""Pytest configuration and shared fixtures for klaw-mersenne tests."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

import pytest
from klaw_mersenne import MersenneTwister, clear_log_hooks, reset_config

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Start every test from the default configuration with no log hooks or root handlers."""
    monkeypatch.delenv('KLAW_MERSENNE_BYTE_LIMIT', raising=False)
    monkeypatch.delenv('KLAW_MERSENNE_LOG_LEVEL', raising=False)
    reset_config()
    clear_log_hooks()
    yield
    reset_config()
    clear_log_hooks()
    logging.getLogger().handlers.clear()


@pytest.fixture(scope='session')
def stdlib_twin() -> Callable[[MersenneTwister], random.Random]:
    """Load CPython's C MT19937 with a generator's current state.

    getrandbits(32) on the returned Random yields the words the generator
    would yield next.
    """

    def make(gen: MersenneTwister) -> random.Random:
        state = gen.getstate()
        twin = random.Random()
        twin.setstate((3, (*state.words, state.index), None))
        return twin

    return make
