#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Optional


class UploadResponse(BaseModel):
    """Result of uploading a candidate file."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "session_id": "session_3f2a9c0e8b7d4e1f9a6b5c4d3e2f1a0b",
                "file_hash": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
                "stats": {"total": 120, "withEmail": 118, "withName": 120},
                "detected_fields": {"nameFields": ["full_name"], "skillFields": ["skills"]},
                "expires_at": "2026-02-01T13:00:00+00:00"
            }
        }
    )

    success: bool
    session_id: str
    file_hash: str
    stats: Dict[str, int]
    detected_fields: Dict[str, List[str]]
    expires_at: Optional[str] = None


class SessionResponse(BaseModel):
    """Summary of a stored session."""
    session_id: str
    candidate_count: int
    file_hash: str
    uploaded_at: str
    expires_at: Optional[str] = None
    detected_fields: Dict[str, List[str]]
