"""Category status policy."""

from collections.abc import Iterable

from ..domain.models import CategoryReport, ExecutionResult, ProbeKind


def is_category_failure(result: ExecutionResult) -> bool:
    """Whether a result counts against its category's outcome.

    Informational probes are recorded but never fail the category.
    """
    return result.failed and not result.probe.informational


def aggregate(kind: ProbeKind, results: Iterable[ExecutionResult]) -> CategoryReport:
    """Derive the outcome of one execution round for a category.

    The category is unhealthy if at least one non-informational probe failed;
    an empty round is healthy. Each result is judged on its own.
    """
    collected = tuple(results)
    healthy = not any(is_category_failure(r) for r in collected)
    return CategoryReport(kind=kind, healthy=healthy, results=collected)
