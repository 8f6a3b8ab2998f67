"""Tests for logging configuration, hooks and the events the generator emits."""

from __future__ import annotations

from typing import Any

import pytest
from klaw_mersenne import (
    GeneratorStateError,
    MersenneTwister,
    Rand,
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    init,
    remove_log_hook,
)


@pytest.fixture
def events() -> list[dict[str, Any]]:
    """Configure DEBUG logging and collect every event dict."""
    received: list[dict[str, Any]] = []
    configure_logging(level='DEBUG', json_output=True)
    add_log_hook(received.append)
    return received


class TestLogHooks:
    """Tests for logging hooks functionality."""

    def test_hook_receives_log_events(self, events: list[dict[str, Any]]) -> None:
        get_logger('test').info('Test message', extra_field='extra_value')

        test_entries = [e for e in events if e.get('event') == 'Test message']
        assert len(test_entries) == 1
        assert test_entries[0]['extra_field'] == 'extra_value'

    def test_remove_hook(self) -> None:
        calls: list[str] = []

        def hook(event_dict: dict[str, Any]) -> None:
            calls.append('called')

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(hook)

        logger = get_logger('test')
        logger.info('First')
        assert len(calls) == 1

        remove_log_hook(hook)
        logger.info('Second')
        assert len(calls) == 1

    def test_clear_hooks(self) -> None:
        calls: list[str] = []
        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(lambda _: calls.append('hook1'))
        add_log_hook(lambda _: calls.append('hook2'))

        logger = get_logger('test')
        logger.info('First')
        assert len(calls) == 2

        clear_log_hooks()
        logger.info('Second')
        assert len(calls) == 2

    def test_hook_exception_does_not_break_logging(self) -> None:
        calls: list[str] = []

        def bad_hook(event_dict: dict[str, Any]) -> None:
            raise RuntimeError('Hook failed')

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(bad_hook)
        add_log_hook(lambda _: calls.append('good'))

        get_logger('test').info('Test')
        assert 'good' in calls

    def test_level_filters_events(self) -> None:
        received: list[dict[str, Any]] = []
        configure_logging(level='WARNING', json_output=True)
        add_log_hook(received.append)

        get_logger('test').debug('quiet')
        assert not [e for e in received if e.get('event') == 'quiet']

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level='INFO', json_output=False)
        get_logger('test').info('console message')
        assert 'console message' in capsys.readouterr().err


class TestGeneratorEvents:
    """Events emitted by the generator and distribution layer."""

    def test_seeding_is_logged(self, events: list[dict[str, Any]]) -> None:
        MersenneTwister(1234)
        seeded = [e for e in events if e.get('event') == 'generator seeded']
        assert seeded[-1]['seed'] == 1234
        assert seeded[-1]['level'] == 'debug'

    def test_draws_are_not_logged(self, events: list[dict[str, Any]]) -> None:
        gen = MersenneTwister(1)
        before = len(events)
        for _ in range(2000):
            gen.next_uint32()
        assert len(events) == before

    def test_rejected_bytes_are_logged(self, events: list[dict[str, Any]]) -> None:
        Rand(byte_limit=4).try_next_bytes(5)
        rejected = [e for e in events if e.get('event') == 'byte request rejected']
        assert rejected[-1]['reason'] == 'ResourceLimitExceeded'
        assert rejected[-1]['length'] == 5

    def test_corrupted_cursor_is_critical(self, events: list[dict[str, Any]]) -> None:
        gen = MersenneTwister(1)
        gen._index = 999
        with pytest.raises(GeneratorStateError):
            gen.next_uint32()
        critical = [e for e in events if e.get('level') == 'critical']
        assert critical[-1]['index'] == 999

    def test_init_configures_logging(self) -> None:
        received: list[dict[str, Any]] = []
        init(log_level='DEBUG')
        add_log_hook(received.append)
        MersenneTwister(5)
        assert any(e.get('event') == 'generator seeded' for e in received)
