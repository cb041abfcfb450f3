from alfred.client.api_client import DashboardApiClient
from alfred.client.event_stream import EventStreamListener, iter_sse_events
from alfred.client.store import DashboardStore, FilteredCollection, insight_to_communication

__all__ = [
    "DashboardApiClient",
    "DashboardStore",
    "EventStreamListener",
    "FilteredCollection",
    "insight_to_communication",
    "iter_sse_events",
]
