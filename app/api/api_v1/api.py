from fastapi import APIRouter
from app.api.api_v1.endpoints import (
    advisory,
    audit_logs,
    auth,
    cases,
    dashboard,
    documents,
    health,
    users,
)

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(cases.router, prefix="/cases", tags=["cases"])
api_router.include_router(advisory.router, prefix="/advisory", tags=["advisory"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
