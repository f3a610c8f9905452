"""Manager modules for FreeBadges integration.

Managers own one slice of coordinator state each and handle its remote
synchronization, persistence and change notification.
"""

from .base_manager import BaseManager
from .catalog_manager import CatalogManager
from .session_manager import SessionManager
from .submission_manager import SubmissionManager

__all__ = [
    "BaseManager",
    "CatalogManager",
    "SessionManager",
    "SubmissionManager",
]
