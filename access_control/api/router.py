"""
API Router

Aggregates all admin API routes.
"""

from fastapi import APIRouter

from access_control.api import auth
from access_control.api.v1 import (
    access_records,
    attendances,
    devices,
    groups,
    people,
    rules,
    servers,
    users,
)

router = APIRouter()

# Authentication
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# V1 Admin APIs
router.include_router(
    servers.router,
    prefix="/access-control-servers",
    tags=["Access Control Servers"],
)
router.include_router(
    devices.router,
    prefix="/access-control-devices",
    tags=["Access Control Devices"],
)
router.include_router(
    groups.router,
    prefix="/access-control-groups",
    tags=["Access Control Groups"],
)
router.include_router(
    rules.router,
    prefix="/access-control-rules",
    tags=["Access Control Rules"],
)
router.include_router(
    attendances.router,
    prefix="/attendances",
    tags=["Attendances"],
)
router.include_router(people.router, prefix="/people", tags=["People"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(
    access_records.router,
    prefix="/access-records",
    tags=["Access Records"],
)
