# routes.py
from fastapi import FastAPI
from controller.notification_controller import notification_router
from controller.reasoning_controller import reasoning_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(reasoning_router)
    app.include_router(notification_router)
