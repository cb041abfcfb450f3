from .notification_hub import ClientSession, NotificationHub, format_sse
from .mutation_notifier import MutationNotifier
from .synthetic_broadcaster import SyntheticBroadcaster
from .project_service import ProjectService
from .communication_service import CommunicationService
from .action_service import ActionService
from .weather_service import WeatherService

__all__ = [
    "ClientSession",
    "NotificationHub",
    "format_sse",
    "MutationNotifier",
    "SyntheticBroadcaster",
    "ProjectService",
    "CommunicationService",
    "ActionService",
    "WeatherService",
]
