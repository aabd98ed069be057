"""Service modules - Business logic layer"""
from .directory_service import DirectoryService
from .recipient_service import RecipientService
from .notification_service import NotificationService

__all__ = [
    "DirectoryService",
    "RecipientService",
    "NotificationService",
]
