"""Fluent construction of probes."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx

from ..core.context import ProbeContext
from ..domain.exceptions import ProbeValidationException
from ..domain.models import CheckFunc, Probe, ProbeKind
from .checks import DEFAULT_TIMEOUT, CheckFactory

LIVENESS_PROBE_NAME = "liveness"
DEADMANS_SNITCH_NAME = "dead man's snitch"


class ProbeBuilder:
    """Builds a :class:`Probe` step by step.

    The stock ``with_*_check`` methods install a check bounded by the
    builder's default timeout and fill in a default name unless one was
    already set.

    Example:
        >>> probe = (
        ...     ProbeBuilder()
        ...     .with_http_get_check("http://localhost:8080/ping")
        ...     .with_kind(ProbeKind.READINESS)
        ...     .must_build()
        ... )
    """

    def __init__(self, default_timeout: float = DEFAULT_TIMEOUT):
        self.default_timeout = default_timeout
        self.checks = CheckFactory(default_timeout)
        self._name = ""
        self._kind: ProbeKind | None = None
        self._check: CheckFunc | None = None
        self._informational = False

    def with_kind(self, kind: ProbeKind | str) -> "ProbeBuilder":
        self._kind = ProbeKind(kind)
        return self

    def with_name(self, name: str) -> "ProbeBuilder":
        """Set a friendly name, used as registry key and metrics label."""
        self._name = name
        return self

    def with_informational(self, informational: bool = True) -> "ProbeBuilder":
        """Record failures without failing the probe's category."""
        self._informational = informational
        return self

    def with_custom_check(self, check: CheckFunc) -> "ProbeBuilder":
        self._check = check
        return self

    def _with_stock_check(self, check: CheckFunc, default_name: str) -> "ProbeBuilder":
        self._check = check
        if not self._name.strip():
            self._name = default_name
        return self

    def with_tcp_dial_check(self, address: str) -> "ProbeBuilder":
        return self._with_stock_check(self.checks.tcp_dial(address), "tcp dial")

    def with_dns_resolve_check(self, host: str) -> "ProbeBuilder":
        return self._with_stock_check(self.checks.dns_resolve(host), "dns resolve")

    def with_http_get_check(
        self, url: str, client: httpx.AsyncClient | None = None
    ) -> "ProbeBuilder":
        return self._with_stock_check(self.checks.http_get(url, client), "http get")

    def with_database_check(
        self, connection_factory: Callable[[], Awaitable[Any]]
    ) -> "ProbeBuilder":
        return self._with_stock_check(
            self.checks.database_ping(connection_factory), "sql database"
        )

    def with_redis_check(self, client: Any) -> "ProbeBuilder":
        return self._with_stock_check(self.checks.client_ping(client), "redis")

    def with_ping_check(self, client: Any, name: str = "opensearch") -> "ProbeBuilder":
        """Ping a search-engine style client exposing ``ping()``."""
        return self._with_stock_check(self.checks.client_ping(client), name)

    def validate(self) -> list[str]:
        """List what is missing for a strict build."""
        issues = []
        if not self._name.strip():
            issues.append("no probe name")
        if self._check is None:
            issues.append("no probe check function")
        return issues

    def build(self) -> Probe:
        """Build the probe without validation.

        The name is stripped and the kind defaults to ``ProbeKind.HEALTH``.
        The result may lack a name or a check function.
        """
        return Probe(
            name=self._name.strip(),
            kind=self._kind or ProbeKind.HEALTH,
            check=self._check,
            informational=self._informational,
        )

    def must_build(self) -> Probe:
        """Build the probe, refusing incomplete definitions.

        Raises:
            ProbeValidationException: Name or check function is missing
        """
        issues = self.validate()
        if issues:
            raise ProbeValidationException(issues, probe_name=self._name.strip() or None)
        return self.build()

    def build_liveness_probe(self) -> Probe:
        """A liveness probe that always succeeds."""

        async def alive(ctx: ProbeContext) -> None:
            return None

        return (
            ProbeBuilder(self.default_timeout)
            .with_name(LIVENESS_PROBE_NAME)
            .with_custom_check(alive)
            .with_kind(ProbeKind.LIVENESS)
            .must_build()
        )

    def build_deadmans_snitch(self) -> Probe:
        """An informational liveness probe that always fails.

        It keeps the unhealthy gauge permanently raised, so an alert can be
        built on the series going missing. Being informational, it never
        fails the liveness endpoint.
        """

        async def snitch(ctx: ProbeContext) -> None:
            raise RuntimeError(DEADMANS_SNITCH_NAME)

        return (
            ProbeBuilder(self.default_timeout)
            .with_name(DEADMANS_SNITCH_NAME)
            .with_custom_check(snitch)
            .with_kind(ProbeKind.LIVENESS)
            .with_informational()
            .must_build()
        )

    def build_for_components(
        self, kind: ProbeKind, components: Mapping[str, bool]
    ) -> list[Probe]:
        """One probe per component, failing while its flag is false.

        The mapping is read each time a check runs, so flipping a flag takes
        effect on the next round.
        """
        kind = ProbeKind(kind)
        probes = []
        for component in components:

            async def check(ctx: ProbeContext, component: str = component) -> None:
                if not components.get(component):
                    raise RuntimeError(
                        f"{kind.value} for component '{component}' set to 'false'"
                    )

            probes.append(
                ProbeBuilder(self.default_timeout)
                .with_name(f"component {component}")
                .with_kind(kind)
                .with_custom_check(check)
                .build()
            )
        return probes
