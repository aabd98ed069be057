"""API module - Routes and dependencies"""
from .deps import (
    get_correlation_id_dep,
    get_directory_service,
    get_notification_service,
    get_recipient_service,
)

__all__ = [
    "get_correlation_id_dep",
    "get_directory_service",
    "get_notification_service",
    "get_recipient_service",
]
