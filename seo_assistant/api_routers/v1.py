from fastapi import APIRouter

from seo_assistant.features.audit.routes.audit import router as audit_router
from seo_assistant.features.health.routes.health import router as health_router

api_router = APIRouter()

api_router.include_router(audit_router)
api_router.include_router(health_router)
