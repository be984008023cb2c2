"""Concurrent probe execution."""

import asyncio
import time
import uuid

from ..domain.models import ExecutionResult, HealthState, Probe
from ..observability.logging import get_logger
from .context import ProbeContext

logger = get_logger(__name__)

NO_CHECK_FUNCTION = "no probe check function"
CHECK_FAILED = "check failed"


class ProbeExecutor:
    """Runs probes concurrently, one task per probe.

    The executor imposes no timeout and no retries: the context handed to
    :meth:`execute` is the only bound on how long a round takes. A failing or
    crashing check only affects its own result.
    """

    async def execute(
        self, ctx: ProbeContext, probes: list[Probe]
    ) -> list[ExecutionResult]:
        """Run every probe and return exactly one result per probe.

        The order of the returned results is unspecified.
        """
        if not probes:
            return []

        round_id = uuid.uuid4().hex[:12]
        log = logger.bind(round_id=round_id)
        log.debug("Starting execution round", probe_count=len(probes))
        started = time.perf_counter()

        caller = asyncio.current_task()
        results = await asyncio.gather(
            *(self._run_probe(ctx, p, caller) for p in probes)
        )

        failed = [r for r in results if r.failed]
        log.debug(
            "Finished execution round",
            probe_count=len(results),
            failure_count=len(failed),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return list(results)

    async def _run_probe(
        self, ctx: ProbeContext, probe: Probe, caller: asyncio.Task | None = None
    ) -> ExecutionResult:
        started = time.perf_counter()
        error: str | None = None
        error_type: str | None = None

        try:
            if probe.check is None:
                error, error_type = NO_CHECK_FUNCTION, "MissingCheck"
            else:
                outcome = await probe.check(ctx)
                if isinstance(outcome, str | BaseException):
                    error = str(outcome) or CHECK_FAILED
                    error_type = type(outcome).__name__
        except asyncio.CancelledError as exc:
            if caller is not None and caller.cancelling():
                raise
            # Cancelled from inside the check, not by the awaiting caller.
            error, error_type = str(exc) or "check cancelled", type(exc).__name__
        except Exception as exc:
            error, error_type = str(exc) or type(exc).__name__, type(exc).__name__

        duration_ms = (time.perf_counter() - started) * 1000

        if error is None:
            return ExecutionResult(
                probe=probe.with_health(HealthState.HEALTHY), duration_ms=duration_ms
            )

        logger.warning(
            "Probe check failed",
            probe=probe.name,
            kind=probe.kind.value,
            informational=probe.informational,
            error=error,
            error_type=error_type,
        )
        return ExecutionResult(
            probe=probe.with_health(HealthState.UNHEALTHY),
            error=error,
            error_type=error_type,
            duration_ms=duration_ms,
        )
