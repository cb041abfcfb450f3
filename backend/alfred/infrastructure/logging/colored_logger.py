"""Colored broadcast logger — ANSI-colored console tracing of realtime events.

Every event the notification hub pushes is logged on one line, colored by
the record family it belongs to, so the live feed can be followed in the
terminal next to the request log.

Color scheme:
    🟢 Green   — Projects
    🔵 Blue    — Communications
    🟣 Magenta — AI insights
    🟡 Yellow  — Action items / risks
    🟠 Cyan    — Weather
    🔴 Red     — Deletions and dropped sessions
    ⚪ Gray    — Connection bookkeeping
"""

import logging
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Topic families ───────────────────────────────────────────────────

class TopicFamily:
    """Label, color and icon per event family."""

    PROJECT = ("PROJECT", _Colors.GREEN, "🏗️")
    COMMUNICATION = ("COMMS", _Colors.BLUE, "💬")
    AI = ("AI", _Colors.MAGENTA, "🤖")
    ACTION = ("ACTION", _Colors.YELLOW, "📌")
    RISK = ("RISK", _Colors.YELLOW, "⚠️")
    WEATHER = ("WEATHER", _Colors.CYAN, "🌤️")
    SESSION = ("SESSION", _Colors.GRAY, "🔌")
    OTHER = ("EVENT", _Colors.WHITE, "📡")


_PREFIXES: tuple[tuple[str, tuple[str, str, str]], ...] = (
    ("project-", TopicFamily.PROJECT),
    ("communication-", TopicFamily.COMMUNICATION),
    ("ai-", TopicFamily.AI),
    ("action-", TopicFamily.ACTION),
    ("risk-", TopicFamily.RISK),
    ("weather-", TopicFamily.WEATHER),
    ("connected", TopicFamily.SESSION),
)


def family_for(topic: str) -> tuple[str, str, str]:
    for prefix, family in _PREFIXES:
        if topic.startswith(prefix):
            return family
    return TopicFamily.OTHER


# ── BroadcastLogger ──────────────────────────────────────────────────

class BroadcastLogger:
    """Color-coded logger for hub emits.

    Usage:
        log = BroadcastLogger("NotificationHub")
        log.emitted("project-new", recipients=3, target="all")
        log.session("connected", "c0ffee", clients=4)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def emitted(self, topic: str, **kwargs: Any) -> None:
        """Log one broadcast with the topic's family color."""
        label, color, icon = family_for(topic)
        if topic.endswith("-deleted"):
            color = _Colors.RED
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{topic}{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    def session(self, action: str, session_id: str, **kwargs: Any) -> None:
        """Log connect / disconnect / join / leave bookkeeping (debug level)."""
        label, color, icon = TopicFamily.SESSION
        formatted = f"   {color}{icon} [{label}] {action} {session_id}{_Colors.RESET}"
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.DIM}({details}){_Colors.RESET}"
        self._logger.debug(formatted)

    def dropped(self, session_id: str, reason: str) -> None:
        """Log a session the hub had to drop, in red."""
        self._logger.warning(
            f"{_Colors.RED}{_Colors.BOLD}❌ [DROPPED]{_Colors.RESET} "
            f"{_Colors.RED}{session_id}{_Colors.RESET} "
            f"{_Colors.DIM}→ {reason}{_Colors.RESET}"
        )
