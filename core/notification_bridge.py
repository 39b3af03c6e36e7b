# core/notification_bridge.py
from typing import Optional
from core.entities import NotificationKey, NotificationRequest
from util.types import NotificationType

COMMENT_ADDED: NotificationType = "comment_added"


def derive_key(event_type: str, document_id: str) -> NotificationKey:
    """Equal inputs give equal keys; the store upserts by key."""
    return NotificationKey(event_type=event_type, document_id=document_id)


def should_suppress(actor_id: str, recipient_id: str) -> bool:
    # never notify self
    return actor_id == recipient_id


def plan_notification(
    *,
    recipient_id: str,
    actor_id: str,
    document_id: str,
    document_type: str,
    type: str,
    message: str,
) -> Optional[NotificationRequest]:
    """Returns None when the notification must not be sent."""
    if should_suppress(actor_id, recipient_id):
        return None
    return NotificationRequest(
        recipient_id=recipient_id,
        actor_id=actor_id,
        document_id=document_id,
        document_type=document_type,
        type=type,
        message=message,
        dedupe_key=derive_key(type, document_id),
    )


def notify_owner_comment(
    *, owner_id: str, actor_id: str, document_id: str, document_type: str
) -> Optional[NotificationRequest]:
    return plan_notification(
        recipient_id=owner_id,
        actor_id=actor_id,
        document_id=document_id,
        document_type=document_type,
        type=COMMENT_ADDED,
        message="New comment on your document",
    )


def notify_collaborator_comment(
    *, collaborator_id: str, actor_id: str, document_id: str, document_type: str
) -> Optional[NotificationRequest]:
    return plan_notification(
        recipient_id=collaborator_id,
        actor_id=actor_id,
        document_id=document_id,
        document_type=document_type,
        type=COMMENT_ADDED,
        message="New comment on a document shared with you",
    )
