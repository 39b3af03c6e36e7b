# service/notification_service.py
import logging
from core.notification_bridge import notify_collaborator_comment, notify_owner_comment
from model.api import PlanNotificationRequest, PlanNotificationResponse

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Plans comment notifications. Persistence (idempotent upsert by dedupe
    key) belongs to the caller's store.
    """

    def plan_comment(self, req: PlanNotificationRequest) -> PlanNotificationResponse:
        if req.audience == "owner":
            planned = notify_owner_comment(
                owner_id=req.recipientId,
                actor_id=req.actorId,
                document_id=req.documentId,
                document_type=req.documentType,
            )
        else:
            planned = notify_collaborator_comment(
                collaborator_id=req.recipientId,
                actor_id=req.actorId,
                document_id=req.documentId,
                document_type=req.documentType,
            )

        if planned is None:
            logger.info("notify.suppressed doc=%s reason=self", req.documentId)
            return PlanNotificationResponse(suppressed=True)

        logger.info("notify.planned doc=%s key=%s", req.documentId, planned.dedupe_key)
        return PlanNotificationResponse(
            suppressed=False,
            dedupeKey=planned.dedupe_key.value,
            notification=planned,
        )
