"""API v1 router for communications endpoints."""

from fastapi import APIRouter

from .calls import router as calls_router
from .messages import router as messages_router

api_router = APIRouter()
api_router.include_router(messages_router)
api_router.include_router(calls_router)
