"""Renderers for structured probe logs."""

import json
from datetime import UTC, datetime
from typing import Any

from colorama import Fore, Style, init

init(autoreset=True)

# Keys rendered in a fixed position ahead of the free-form fields.
_RESERVED_KEYS = ("timestamp", "level", "logger", "correlation_id", "event")


def _render_value(value: Any) -> str:
    if isinstance(value, dict | list | tuple):
        return json.dumps(value, default=str)
    return str(value)


def _extra_fields(event_dict: dict[str, Any]) -> list[tuple[str, Any]]:
    return [(k, v) for k, v in event_dict.items() if k not in _RESERVED_KEYS]


class JSONFormatter:
    """One JSON document per log event."""

    def __init__(self, ensure_ascii: bool = False, sort_keys: bool = False):
        self.ensure_ascii = ensure_ascii
        self.sort_keys = sort_keys

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> str:
        event_dict.setdefault("timestamp", datetime.now(UTC).isoformat())
        event_dict["level"] = method_name.upper()
        if "logger" not in event_dict and logger is not None:
            event_dict["logger"] = getattr(logger, "name", None)

        return json.dumps(
            event_dict,
            ensure_ascii=self.ensure_ascii,
            sort_keys=self.sort_keys,
            default=str,
        )


class ConsoleFormatter:
    """Human readable, optionally coloured, single-line output."""

    level_colors = {
        "debug": Fore.CYAN,
        "info": Fore.GREEN,
        "warning": Fore.YELLOW,
        "error": Fore.RED,
        "critical": Fore.RED + Style.BRIGHT,
    }

    def __init__(self, colors: bool = True):
        self.colors = colors

    def _paint(self, color: str, text: str) -> str:
        if not self.colors:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> str:
        parts: list[str] = []

        timestamp = event_dict.get("timestamp")
        if timestamp is not None:
            if isinstance(timestamp, datetime):
                timestamp = timestamp.isoformat()
            parts.append(f"[{timestamp}]")

        level = method_name.lower()
        parts.append(self._paint(self.level_colors.get(level, ""), level.upper()))

        if "logger" in event_dict:
            parts.append(self._paint(Fore.BLUE, f"[{event_dict['logger']}]"))
        if "correlation_id" in event_dict:
            parts.append(self._paint(Fore.MAGENTA, f"[{event_dict['correlation_id']}]"))

        message = event_dict.get("event")
        if message:
            parts.append(str(message))

        extras = _extra_fields(event_dict)
        if extras:
            rendered = " ".join(f"{k}={_render_value(v)}" for k, v in extras)
            parts.append(self._paint(Fore.WHITE, rendered))

        return " ".join(parts)


class KeyValueFormatter:
    """Plain ``key=value`` pairs, suited to log shippers without JSON support."""

    def __init__(self, separator: str = " "):
        self.separator = separator

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> str:
        pairs: list[str] = []
        if "timestamp" in event_dict:
            pairs.append(f"timestamp={event_dict['timestamp']}")
        pairs.append(f"level={method_name.upper()}")
        for key in ("logger", "correlation_id"):
            if key in event_dict:
                pairs.append(f"{key}={event_dict[key]}")
        if "event" in event_dict:
            pairs.append(f"message={json.dumps(str(event_dict['event']))}")
        pairs.extend(f"{k}={_render_value(v)}" for k, v in _extra_fields(event_dict))
        return self.separator.join(pairs)
