"""Execution module for the portal client.

Provides the request lifecycle stages: augmentation, classification,
retry, session invalidation and user notification.
"""

from placement_portal.core.execution.error_classifier import ErrorClassifier
from placement_portal.core.execution.models import OutboundRequest, RetryState
from placement_portal.core.execution.request_augmenter import RequestAugmenter
from placement_portal.core.execution.retry_controller import RetryController
from placement_portal.core.execution.session_invalidator import SessionInvalidator
from placement_portal.core.execution.user_notifier import (
    CollectingSink,
    Notification,
    UserNotifier,
)

__all__ = [
    "CollectingSink",
    "ErrorClassifier",
    "Notification",
    "OutboundRequest",
    "RequestAugmenter",
    "RetryController",
    "RetryState",
    "SessionInvalidator",
    "UserNotifier",
]
