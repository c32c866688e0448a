"""Tests for waiting on records that are still being registered."""

import asyncio

import pytest

from apphost.backends.mock_backend import MockBackend
from apphost.base.errors import RecordWaitTimeoutError
from apphost.registry import get_app_record, register_app


class TestAwaitRecord:
    """get_app_record resolves, waits, or times out."""

    @pytest.mark.asyncio
    async def test_resolves_immediately_for_existing_record(self, ctx, make_app, make_descriptor):
        app = make_app("Shop")
        await register_app(make_descriptor(app), ctx)

        record = await get_app_record(app, ctx)

        assert record.app is app
        assert ctx.waiters.pending_count(app) == 0

    @pytest.mark.asyncio
    async def test_waits_for_in_flight_registration(
        self, ctx, make_app, make_descriptor, monkeypatch
    ):
        monkeypatch.setattr(MockBackend, "response_delay_ms", 5)
        app = make_app("Shop")
        registration = asyncio.ensure_future(register_app(make_descriptor(app), ctx))
        await asyncio.sleep(0)

        record = await get_app_record(app, ctx)
        await registration

        assert record.id == "shop"
        assert record is ctx.find_record(app)

    @pytest.mark.asyncio
    async def test_times_out_without_registration(self, ctx, make_app):
        app = make_app("Ghost")

        with pytest.raises(RecordWaitTimeoutError) as exc_info:
            await get_app_record(app, ctx)

        assert exc_info.value.app is app
        assert exc_info.value.timeout_ms == ctx.settings.wait_timeout_ms
        assert "Timed out getting app record" in str(exc_info.value)
        assert ctx.waiters.pending_count(app) == 0

    @pytest.mark.asyncio
    async def test_explicit_timeout(self, ctx, make_app):
        with pytest.raises(RecordWaitTimeoutError) as exc_info:
            await ctx.waiters.await_record(make_app(), timeout=0.01)
        assert exc_info.value.timeout_ms == 10


class TestResolve:
    """Delivery to waiters happens in order and skips expired ones."""

    @pytest.mark.asyncio
    async def test_multiple_waiters_receive_record_in_order(self, ctx, make_app, make_descriptor):
        app = make_app("Shop")
        order = []

        async def wait(tag):
            record = await ctx.waiters.await_record(app)
            order.append(tag)
            return record

        waits = [asyncio.ensure_future(wait(tag)) for tag in ("first", "second", "third")]
        await asyncio.sleep(0)
        assert ctx.waiters.pending_count(app) == 3

        await register_app(make_descriptor(app), ctx)
        records = await asyncio.gather(*waits)

        assert order == ["first", "second", "third"]
        assert all(record is records[0] for record in records)
        assert ctx.waiters.pending_count(app) == 0

    @pytest.mark.asyncio
    async def test_expired_waiter_is_skipped(self, ctx, make_app, make_descriptor):
        app = make_app("Shop")

        with pytest.raises(RecordWaitTimeoutError):
            await ctx.waiters.await_record(app, timeout=0.01)

        # Late delivery after expiry must not fail
        await register_app(make_descriptor(app), ctx)
        assert ctx.find_record(app) is not None

    @pytest.mark.asyncio
    async def test_cancelled_wait_is_skipped(self, ctx, make_app, make_descriptor):
        app = make_app("Shop")
        wait = asyncio.ensure_future(ctx.waiters.await_record(app))
        await asyncio.sleep(0)

        wait.cancel()
        with pytest.raises(asyncio.CancelledError):
            await wait

        assert ctx.waiters.pending_count(app) == 0
        await register_app(make_descriptor(app), ctx)

    @pytest.mark.asyncio
    async def test_resolve_without_waiters_is_noop(self, ctx, make_app, make_descriptor):
        app = make_app("Shop")
        await register_app(make_descriptor(app), ctx)

        await ctx.waiters.resolve(app, ctx.find_record(app))
