# controller/notification_controller.py
from fastapi import APIRouter, Depends
from controller.controller_dependencies import RATE_LIMITED, get_notification_service
from model.api import PlanNotificationRequest, PlanNotificationResponse
from service.notification_service import NotificationService
from util.constants import InternalURIs

notification_router = APIRouter(dependencies=RATE_LIMITED)


@notification_router.post(
    InternalURIs.PLAN_NOTIFICATION, response_model=PlanNotificationResponse
)
async def plan_notification(
    payload: PlanNotificationRequest,
    service: NotificationService = Depends(get_notification_service),
) -> PlanNotificationResponse:
    return service.plan_comment(payload)
