"""End-to-end capture against a local collector."""

from types import SimpleNamespace

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

import rootly_runtime
from rootly_runtime.core.context import RuntimeContext, set_runtime_context


@pytest_asyncio.fixture
async def collector():
    """Local collector recording ingest requests."""
    received = []

    async def ingest(request: web.Request) -> web.Response:
        received.append(
            {
                "path": request.path,
                "headers": dict(request.headers),
                "body": await request.json(),
            }
        )
        return web.json_response({"incident_id": "inc_1"}, status=201)

    app = web.Application()
    app.router.add_post("/api/ingest", ingest)
    server = TestServer(app)
    await server.start_server()

    yield SimpleNamespace(url=f"http://{server.host}:{server.port}", received=received)

    await server.close()


@pytest.fixture
def live_context(monkeypatch, collector):
    """Uninitialized process context with a real transport."""
    monkeypatch.setenv("ROOTLY_API_URL", collector.url)
    context = RuntimeContext()
    set_runtime_context(context)
    return context


@pytest.mark.integration
class TestEndToEnd:
    """Capture through init, the pipeline and the network."""

    @pytest.mark.asyncio
    async def test_capture_posts_report(self, live_context, collector):
        """Test a single captured error arriving at the collector."""
        rootly_runtime.init(
            api_key="rk_live_e2e", environment="production", capture_unhandled=False
        )

        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            await rootly_runtime.capture(e)

        assert len(collector.received) == 1
        request = collector.received[0]
        assert request["path"] == "/api/ingest"
        assert request["headers"]["Authorization"] == "Bearer rk_live_e2e"
        assert request["headers"]["Content-Type"] == "application/json"
        body = request["body"]
        assert body["error"]["message"] == "boom"
        assert body["error"]["type"] == "RuntimeError"
        assert body["error"]["severity"] == "error"
        assert "raise RuntimeError(\"boom\")" in body["error"]["stack"]
        assert body["context"] == {"environment": "production"}

    @pytest.mark.asyncio
    async def test_fire_and_forget_then_flush(self, live_context, collector):
        """Test that flush drains reports that were never awaited."""
        rootly_runtime.init(api_key="rk_live_e2e", capture_unhandled=False)

        @rootly_runtime.wrap
        async def handler(n):
            raise ValueError(f"handler failed {n}")

        for n in range(3):
            with pytest.raises(ValueError):
                await handler(n)

        assert rootly_runtime.pending_requests() == 3
        await rootly_runtime.flush(2_000)

        assert rootly_runtime.pending_requests() == 0
        messages = sorted(r["body"]["error"]["message"] for r in collector.received)
        assert messages == ["handler failed 0", "handler failed 1", "handler failed 2"]
        assert all(r["body"]["context"]["environment"] == "preview" for r in collector.received)

    @pytest.mark.asyncio
    async def test_duplicate_storm_delivers_once(self, live_context, collector):
        """Test that a burst of identical errors is collapsed."""
        rootly_runtime.init(api_key="rk_live_e2e", capture_unhandled=False)

        for _ in range(50):
            try:
                raise ConnectionError("upstream unavailable")
            except ConnectionError as e:
                rootly_runtime.capture(e)

        await rootly_runtime.flush()

        assert len(collector.received) == 1
