"""FastAPI application exposing the attendance reminder REST API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel

from .config import Settings, load_settings
from .emailjs_client import EmailJSClient
from .errors import AttendanceReminderError, DispatchError
from .models import Employee
from .scheduler import Clock, DailySchedule, DailyScheduler, utc_now
from .service import AttendanceReminderService, EmailTransport, load_roster

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


class SetupRequest(BaseModel):
    email: Any = None
    method: Optional[str] = None


class AttendanceRequest(BaseModel):
    date: Any = None
    records: Any = None


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[EmailTransport] = None,
    roster: Optional[Sequence[Employee]] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    settings = settings or load_settings()
    client = transport or EmailJSClient(
        settings.emailjs_public_key,
        settings.emailjs_private_key,
        timeout=settings.emailjs_timeout,
    )
    service = AttendanceReminderService(
        settings,
        client,
        roster=roster if roster is not None else load_roster(settings.roster_path),
        clock=clock,
    )
    scheduler = DailyScheduler(
        DailySchedule.from_settings(settings),
        service.run_scheduled_send,
        clock=clock,
    )

    app = FastAPI(title="Attendance Reminder API", version="1.0.0")
    app.state.service = service
    app.state.scheduler = scheduler

    @app.exception_handler(AttendanceReminderError)
    async def domain_error_handler(request: Request, exc: AttendanceReminderError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"}
        )

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Server error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.on_event("startup")
    async def startup_event() -> None:  # pragma: no cover - io bound
        scheduler.start()
        logger.info(
            "Attendance reminder started on port %s; reminders at %s (%s)",
            settings.port,
            scheduler.schedule.describe(),
            settings.reminder_timezone,
        )
        logger.info(
            "EmailJS: %s; notifications: %s",
            "configured" if settings.emailjs_configured else "needs setup",
            "enabled" if service.notifications_ready() else "not configured",
        )
        logger.info("App URL: %s", settings.public_base_url)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:  # pragma: no cover - io bound
        await scheduler.stop()
        close = getattr(client, "close", None)
        if close is not None:
            await close()

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        return FileResponse(STATIC_DIR / "index.html")

    @app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/employees")
    async def get_employees() -> List[Dict[str, Any]]:
        return service.list_employees()

    @app.post("/api/notifications/setup")
    async def setup_notifications(payload: SetupRequest) -> dict[str, object]:
        service.setup_notifications(payload.email, payload.method)
        return {"success": True, "message": "Notification settings saved successfully"}

    @app.get("/api/notifications/settings")
    async def get_notification_settings() -> dict[str, object]:
        return service.get_settings().to_dict()

    @app.post("/api/notifications/test")
    async def send_test_notification() -> Any:
        try:
            await service.send_test_notification()
        except DispatchError as exc:
            logger.error("Test email failed: %s", exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Failed to send test email"},
            )
        return {"success": True, "message": "Test email sent successfully!"}

    @app.post("/api/attendance/quick")
    async def submit_quick_attendance(payload: AttendanceRequest) -> dict[str, object]:
        service.submit_attendance(payload.date, payload.records)
        return {"success": True, "message": "Attendance saved successfully"}

    @app.post("/api/notifications/trigger")
    async def trigger_notification() -> Any:
        try:
            result = await service.send_attendance_email()
        except DispatchError:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Failed to send notification"},
            )
        if not result.sent:
            return {"success": True, "message": "Notifications not configured; nothing sent"}
        return {"success": True, "message": "Notification sent manually"}

    @app.get("/api/notifications/schedule")
    async def get_schedule_status() -> dict[str, object]:
        return service.schedule_status(scheduler)

    return app


app = create_app()


__all__ = ["app", "create_app"]
