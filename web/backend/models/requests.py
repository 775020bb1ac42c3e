#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List


class ProcessRequest(BaseModel):
    """Request to run a selection over an uploaded candidate pool."""
    session_id: str = Field(..., min_length=1, description="Session id returned by /api/upload")
    query: str = Field(..., min_length=1, description="Free-text hiring request")


class ExportRequest(BaseModel):
    """Request to export final selections as CSV."""
    results: List[Dict[str, Any]] = Field(..., description="Selections as emitted by the complete event")
