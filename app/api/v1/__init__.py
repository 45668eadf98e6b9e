"""API v1 router aggregator."""

from fastapi import APIRouter

from app.api.v1 import (
    academic_calendar,
    attendance,
    auth,
    classes,
    notifications,
    parent,
    timetable,
)

api_router = APIRouter(tags=["API v1"])

# Include all API routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(classes.router, prefix="/classes", tags=["Classes"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])

# Mobile app routes
api_router.include_router(timetable.router, prefix="/mobile", tags=["Mobile: Timetable"])
api_router.include_router(attendance.router, prefix="/mobile", tags=["Mobile: Attendance"])
api_router.include_router(
    academic_calendar.router, prefix="/mobile", tags=["Mobile: Academic Calendar"]
)
api_router.include_router(parent.router, prefix="/mobile/parent", tags=["Mobile: Parent"])
