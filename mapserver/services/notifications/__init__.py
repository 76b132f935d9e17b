"""Push notification token storage and dispatch."""

from mapserver.services.notifications.dispatcher import (
    MAX_BATCH_SIZE,
    DeliveryStatus,
    NotificationDispatcher,
    batch_tokens,
)
from mapserver.services.notifications.store import (
    InMemoryTokenStore,
    JsonFileTokenStore,
    TokenStore,
)

__all__ = [
    "DeliveryStatus",
    "InMemoryTokenStore",
    "JsonFileTokenStore",
    "MAX_BATCH_SIZE",
    "NotificationDispatcher",
    "TokenStore",
    "batch_tokens",
]
