"""Stock check functions for common dependencies."""

import asyncio
import inspect
import socket
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from ..core.context import ProbeContext
from ..domain.exceptions import CheckFailedError
from ..domain.models import CheckFunc

DEFAULT_TIMEOUT = 5.0


def split_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6-host]:port``) into its parts."""
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Invalid address '{address}', expected host:port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, int(port)


class CheckFactory:
    """Builds check functions that bound their I/O with a default timeout.

    Every check derives ``ctx.with_timeout(timeout)`` from the round's context,
    so it ends at whichever comes first: its own timeout or the caller's
    deadline/cancellation.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def tcp_dial(self, address: str) -> CheckFunc:
        """Open and close a TCP connection to ``host:port``."""
        host, port = split_address(address)

        async def check(ctx: ProbeContext) -> None:
            bounded = ctx.with_timeout(self.timeout)
            _, writer = await bounded.run(asyncio.open_connection(host, port))
            writer.close()
            await writer.wait_closed()

        return check

    def dns_resolve(self, host: str) -> CheckFunc:
        """Resolve ``host`` and require at least one address."""

        async def check(ctx: ProbeContext) -> None:
            bounded = ctx.with_timeout(self.timeout)
            loop = asyncio.get_running_loop()
            addresses = await bounded.run(
                loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)
            )
            if not addresses:
                raise CheckFailedError("could not resolve host", {"host": host})

        return check

    def http_get(self, url: str, client: httpx.AsyncClient | None = None) -> CheckFunc:
        """GET ``url`` without following redirects; status >= 400 fails.

        Args:
            url: URL to request
            client: Client to reuse; a short-lived client is created per call
                when omitted
        """

        async def request(http: httpx.AsyncClient) -> httpx.Response:
            return await http.get(url, follow_redirects=False)

        async def check(ctx: ProbeContext) -> None:
            bounded = ctx.with_timeout(self.timeout)
            if client is not None:
                response = await bounded.run(request(client))
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as http:
                    response = await bounded.run(request(http))

            if response.status_code >= httpx.codes.BAD_REQUEST:
                raise CheckFailedError(
                    f"status code: {response.status_code}",
                    {"url": url, "status_code": response.status_code},
                )

        return check

    def database_ping(self, connection_factory: Callable[[], Awaitable[Any]]) -> CheckFunc:
        """Run ``SELECT 1`` on a connection or pool returned by the factory.

        Works with objects exposing ``execute``, ``fetchval`` or an
        ``acquire()`` async context manager (asyncpg pools, SQLAlchemy async
        connections and the like).
        """

        async def ping(connection: Any) -> None:
            if hasattr(connection, "execute"):
                await connection.execute("SELECT 1")
            elif hasattr(connection, "fetchval"):
                await connection.fetchval("SELECT 1")
            else:
                async with connection.acquire() as conn:
                    await conn.execute("SELECT 1")

        async def check(ctx: ProbeContext) -> None:
            bounded = ctx.with_timeout(self.timeout)
            connection = await bounded.run(connection_factory())
            if connection is None:
                raise CheckFailedError("database is not configured")
            await bounded.run(ping(connection))

        return check

    def client_ping(self, client: Any) -> CheckFunc:
        """Call ``client.ping()``; a falsy reply counts as a failure.

        Suits Redis clients and search-engine clients alike, sync or async.
        """

        async def ping() -> Any:
            reply = client.ping()
            if inspect.isawaitable(reply):
                reply = await reply
            return reply

        async def check(ctx: ProbeContext) -> None:
            if client is None:
                raise CheckFailedError("client is not configured")
            bounded = ctx.with_timeout(self.timeout)
            reply = await bounded.run(ping())
            if reply is False:
                raise CheckFailedError("ping returned false")

        return check
