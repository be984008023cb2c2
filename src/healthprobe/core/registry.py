"""In-memory probe registry."""

from ..domain.exceptions import ProbeRegistrationException
from ..domain.models import Probe, ProbeKind
from ..observability.logging import get_logger
from .locking import ReadWriteLock

logger = get_logger(__name__)


class ProbeRegistry:
    """Concurrent-safe store of probes keyed by name.

    Every read returns a fresh list, so mutating the registry never affects a
    snapshot that an execution round is already working on.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._probes: dict[str, Probe] = {}

    def add(self, *probes: Probe) -> None:
        """Insert probes, replacing any probe registered under the same name.

        Raises:
            ProbeRegistrationException: A probe has an empty name
        """
        for probe in probes:
            if not probe.name or not probe.name.strip():
                raise ProbeRegistrationException(
                    "Probe name must not be empty", probe_name=probe.name
                )

        with self._lock.write_locked():
            for probe in probes:
                replaced = probe.name in self._probes
                self._probes[probe.name] = probe
                logger.info(
                    "Registered probe",
                    probe=probe.name,
                    kind=probe.kind.value,
                    informational=probe.informational,
                    replaced=replaced,
                )

    def get(self, name: str) -> Probe | None:
        """Look up a probe by name, None if it is not registered."""
        with self._lock.read_locked():
            return self._probes.get(name)

    def get_all(self) -> list[Probe]:
        with self._lock.read_locked():
            return list(self._probes.values())

    def get_by_kind(self, kind: ProbeKind) -> list[Probe]:
        """Return the probes of one category.

        ``ProbeKind.HEALTH`` is the on-demand category and returns every
        registered probe.
        """
        if kind == ProbeKind.HEALTH:
            return self.get_all()

        with self._lock.read_locked():
            return [p for p in self._probes.values() if p.kind == kind]

    def delete(self, *names: str) -> None:
        """Remove probes by name; unknown names are ignored."""
        with self._lock.write_locked():
            for name in names:
                if self._probes.pop(name, None) is not None:
                    logger.info("Unregistered probe", probe=name)

    def names(self) -> list[str]:
        with self._lock.read_locked():
            return list(self._probes)

    def __contains__(self, name: object) -> bool:
        with self._lock.read_locked():
            return name in self._probes

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._probes)
