from fastapi import APIRouter

from app.api.v1.endpoints import suggestions

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(suggestions.router)
api_router.include_router(suggestions.meetings_suggestions_router)
