"""Test the stock check functions."""

import asyncio
import socket
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from healthprobe.core import ProbeContext
from healthprobe.domain import CheckFailedError, DeadlineExceededError
from healthprobe.factories import CheckFactory, split_address


def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def checks():
    """Create check factory with a short timeout."""
    return CheckFactory(timeout=1.0)


@pytest.fixture
def ctx():
    return ProbeContext.background()


class TestSplitAddress:
    """Test address parsing."""

    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            ("localhost:5432", ("localhost", 5432)),
            ("10.0.0.1:80", ("10.0.0.1", 80)),
            ("[::1]:6379", ("::1", 6379)),
        ],
    )
    def test_valid(self, address, expected):
        assert split_address(address) == expected

    @pytest.mark.parametrize("address", ["localhost", ":80", "host:port", ""])
    def test_invalid(self, address):
        with pytest.raises(ValueError):
            split_address(address)


class TestTCPDialCheck:
    """Test TCP dial check."""

    @pytest.mark.asyncio
    async def test_listener_reachable(self, checks, ctx):
        """Test dialing a local listener succeeds."""

        async def handle(reader, writer):
            writer.close()

        server = await asyncio.start_server(handle, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        try:
            assert await checks.tcp_dial(f"127.0.0.1:{port}")(ctx) is None
        finally:
            server.close()
            await server.wait_closed()

    @pytest.mark.asyncio
    async def test_closed_port(self, checks, ctx):
        """Test dialing a closed port fails."""
        with pytest.raises(OSError):
            await checks.tcp_dial(f"127.0.0.1:{unused_port()}")(ctx)


class TestDNSResolveCheck:
    """Test DNS resolve check."""

    @pytest.mark.asyncio
    async def test_resolves_localhost(self, checks, ctx):
        assert await checks.dns_resolve("localhost")(ctx) is None

    @pytest.mark.asyncio
    async def test_unresolvable(self, checks, ctx):
        with pytest.raises(OSError):
            await checks.dns_resolve("does-not-exist.invalid")(ctx)


class TestHTTPGetCheck:
    """Test HTTP GET check."""

    @pytest.mark.asyncio
    async def test_success(self, checks, ctx):
        async with mock_client(lambda request: httpx.Response(200)) as client:
            assert await checks.http_get("http://svc/ping", client)(ctx) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 404, 500, 503])
    async def test_error_status(self, checks, ctx, status_code):
        """Test statuses of 400 and above fail the check."""
        async with mock_client(lambda request: httpx.Response(status_code)) as client:
            with pytest.raises(CheckFailedError) as exc_info:
                await checks.http_get("http://svc/ping", client)(ctx)

        assert str(exc_info.value) == f"probe check failed: status code: {status_code}"

    @pytest.mark.asyncio
    async def test_redirect_not_followed(self, checks, ctx):
        """Test a redirect counts as success and is not followed."""
        requested = []

        def handler(request):
            requested.append(request.url.path)
            if request.url.path == "/ping":
                return httpx.Response(302, headers={"Location": "/broken"})
            return httpx.Response(500)

        async with mock_client(handler) as client:
            assert await checks.http_get("http://svc/ping", client)(ctx) is None

        assert requested == ["/ping"]

    @pytest.mark.asyncio
    async def test_timeout(self, ctx):
        """Test a slow endpoint is abandoned at the check timeout."""

        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200)

        checks = CheckFactory(timeout=0.05)
        async with mock_client(handler) as client:
            with pytest.raises(DeadlineExceededError):
                await checks.http_get("http://svc/ping", client)(ctx)


class TestDatabaseCheck:
    """Test database ping check."""

    @pytest.mark.asyncio
    async def test_execute(self, checks, ctx):
        connection = MagicMock()
        connection.execute = AsyncMock()

        async def factory():
            return connection

        await checks.database_ping(factory)(ctx)

        connection.execute.assert_awaited_once_with("SELECT 1")

    @pytest.mark.asyncio
    async def test_not_configured(self, checks, ctx):
        async def factory():
            return None

        with pytest.raises(CheckFailedError, match="database is not configured"):
            await checks.database_ping(factory)(ctx)

    @pytest.mark.asyncio
    async def test_connection_error(self, checks, ctx):
        async def factory():
            raise ConnectionRefusedError("connection refused")

        with pytest.raises(ConnectionRefusedError):
            await checks.database_ping(factory)(ctx)


class TestClientPingCheck:
    """Test Redis / search-engine ping check."""

    @pytest.mark.asyncio
    async def test_async_client(self, checks, ctx):
        client = MagicMock()
        client.ping = AsyncMock(return_value=True)

        assert await checks.client_ping(client)(ctx) is None

    @pytest.mark.asyncio
    async def test_sync_client(self, checks, ctx):
        client = MagicMock()
        client.ping.return_value = True

        assert await checks.client_ping(client)(ctx) is None

    @pytest.mark.asyncio
    async def test_ping_false(self, checks, ctx):
        client = MagicMock()
        client.ping.return_value = False

        with pytest.raises(CheckFailedError, match="ping returned false"):
            await checks.client_ping(client)(ctx)

    @pytest.mark.asyncio
    async def test_missing_client(self, checks, ctx):
        with pytest.raises(CheckFailedError, match="client is not configured"):
            await checks.client_ping(None)(ctx)
