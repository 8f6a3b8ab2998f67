"""Tests for per-task independent generators."""

from __future__ import annotations

import anyio
import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_mersenne import InvalidArgumentError, MersenneTwister, Rand, derive_seed, run_tasks, spawn

from tests.strategies import seeds


class TestDeriveSeed:
    """Tests for derive_seed()."""

    def test_offsets(self) -> None:
        assert derive_seed(100, 0) == 100
        assert derive_seed(100, 5) == 105

    def test_wraps(self) -> None:
        assert derive_seed(2**32 - 1, 1) == 0
        assert derive_seed(2**32 - 2, 5) == 3

    @given(seeds, st.integers(min_value=0, max_value=10_000))
    def test_stays_in_32_bits(self, base: int, offset: int) -> None:
        assert 0 <= derive_seed(base, offset) < 2**32


class TestSpawn:
    """Tests for spawn()."""

    def test_count(self) -> None:
        rands = spawn(4, base_seed=10)
        assert len(rands) == 4
        assert all(isinstance(r, Rand) for r in rands)

    def test_seeds_follow_base(self) -> None:
        rands = spawn(3, base_seed=10)
        for i, rand in enumerate(rands):
            assert rand.next_uint32() == MersenneTwister(10 + i).next_uint32()

    def test_instances_are_independent(self) -> None:
        first, second = spawn(2, base_seed=500)
        first.next_uint32()
        assert second.next_uint32() == MersenneTwister(501).next_uint32()

    def test_zero(self) -> None:
        assert spawn(0, base_seed=1) == []

    def test_negative_count_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            spawn(-1, base_seed=1)

    def test_default_base_from_clock(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr('klaw_mersenne.generator.time.time', lambda: 1000.0)
        rands = spawn(2)
        assert rands[1].next_uint32() == MersenneTwister(1001).next_uint32()

    def test_byte_limit_passed_through(self) -> None:
        assert all(r.byte_limit == 16 for r in spawn(3, base_seed=0, byte_limit=16))


class TestRunTasks:
    """Tests for run_tasks()."""

    async def test_results_in_index_order(self) -> None:
        async def draw(index: int, rand: Rand) -> tuple[int, int]:
            await anyio.sleep(0.001 * (5 - index))
            return index, rand.next_uint32()

        results = await run_tasks(draw, 5, base_seed=42)
        assert [i for i, _ in results] == [0, 1, 2, 3, 4]
        assert [w for _, w in results] == [MersenneTwister(42 + i).next_uint32() for i in range(5)]

    async def test_each_task_owns_its_generator(self) -> None:
        seen: list[int] = []

        async def record(index: int, rand: Rand) -> None:
            seen.append(id(rand))

        await run_tasks(record, 6, base_seed=0)
        assert len(set(seen)) == 6

    async def test_limit_bounds_concurrency(self) -> None:
        active = 0
        peak = 0

        async def work(index: int, rand: Rand) -> float:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await anyio.sleep(0.01)
            active -= 1
            return rand.uniform_f64()

        results = await run_tasks(work, 8, base_seed=3, limit=2)
        assert len(results) == 8
        assert peak <= 2

    async def test_zero_tasks(self) -> None:
        async def never(index: int, rand: Rand) -> None:
            raise AssertionError('not called')

        assert await run_tasks(never, 0, base_seed=1) == []

    async def test_invalid_limit(self) -> None:
        async def noop(index: int, rand: Rand) -> None:
            return None

        with pytest.raises(InvalidArgumentError):
            await run_tasks(noop, 2, base_seed=1, limit=0)

    async def test_reproducible(self) -> None:
        async def gauss(index: int, rand: Rand) -> float:
            return rand.gaussian_f64()

        assert await run_tasks(gauss, 4, base_seed=9) == await run_tasks(gauss, 4, base_seed=9)

    async def test_byte_limit_passed_through(self) -> None:
        async def limit_of(index: int, rand: Rand) -> int | None:
            return rand.byte_limit

        assert await run_tasks(limit_of, 3, base_seed=0, byte_limit=16) == [16, 16, 16]
        assert await run_tasks(limit_of, 2, base_seed=0, byte_limit=None) == [None, None]
