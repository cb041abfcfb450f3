"""Realtime event topics pushed to dashboard clients."""

from enum import Enum


class EventTopic(str, Enum):
    """Names of the events the notification hub delivers.

    The string values are the wire names clients subscribe to.
    """

    CONNECTED = "connected"

    PROJECT_NEW = "project-new"
    PROJECT_UPDATE = "project-update"
    PROJECT_DELETED = "project-deleted"

    COMMUNICATION_NEW = "communication-new"
    COMMUNICATION_UPDATE = "communication-update"
    COMMUNICATION_DELETED = "communication-deleted"
    AI_INSIGHT = "ai-insight"

    ACTION_NEW = "action-new"
    ACTION_UPDATE = "action-update"
    ACTION_DELETED = "action-deleted"

    RISK_NEW = "risk-new"
    RISK_UPDATE = "risk-update"
    RISK_DELETED = "risk-deleted"

    WEATHER_UPDATE = "weather-update"
    WEATHER_DELETED = "weather-deleted"
    WEATHER_TEST = "weather-test"


def project_group(project_id: str) -> str:
    """Group name for sessions following a single project."""
    return f"project-{project_id}"
