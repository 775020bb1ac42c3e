#!/usr/bin/env python3
"""
Session endpoints - inspect or discard an uploaded candidate pool.
"""

from fastapi import APIRouter, Depends

from core.app_context import AppContext
from core.exceptions import SessionNotFoundError
from ..dependencies import get_context
from ..models.responses import SessionResponse

router = APIRouter(prefix="/api/session", tags=["session"])


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, ctx: AppContext = Depends(get_context)):
    session = ctx.session_store.get(session_id)
    if session is None:
        raise SessionNotFoundError(f"Session {session_id} not found or expired")
    return SessionResponse(**session.summary())


@router.delete("/{session_id}")
def delete_session(session_id: str, ctx: AppContext = Depends(get_context)):
    if not ctx.session_store.delete(session_id):
        raise SessionNotFoundError(f"Session {session_id} not found or expired")
    return {"success": True, "session_id": session_id}
