#!/usr/bin/env python3
"""
Export endpoint - download final selections as CSV.
"""

from datetime import datetime
from fastapi import APIRouter
from fastapi.responses import Response

from ..models.requests import ExportRequest
from ..services.export_service import selections_to_csv

router = APIRouter(prefix="/api", tags=["export"])


@router.post("/export")
def export_results(body: ExportRequest):
    filename = f"selected_candidates_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
    return Response(
        content=selections_to_csv(body.results),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
