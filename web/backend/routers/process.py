#!/usr/bin/env python3
"""
Process endpoint - run a selection and stream progress as Server-Sent Events.
"""

import asyncio
import json
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from core.app_context import AppContext
from core.exceptions import SessionNotFoundError
from pipeline.progress import ProcessingProgress
from ..dependencies import get_context
from ..models.requests import ProcessRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["process"])

_STREAM_END = object()


@router.post("/process")
async def process_candidates(body: ProcessRequest, ctx: AppContext = Depends(get_context)):
    """
    Run the selection pipeline over a session's candidates.

    The pipeline runs in a worker thread; every progress event is forwarded
    to the response stream as a ``data: <json>`` frame. The final frame has
    ``stage == "complete"`` and carries the results, or ``stage == "error"``
    when the run could not proceed.
    """
    session = ctx.session_store.get(body.session_id)
    if session is None:
        raise SessionNotFoundError(f"Session {body.session_id} not found or expired")

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def send_progress(event: ProcessingProgress) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, event.to_dict())

    def run_pipeline() -> None:
        try:
            ctx.pipeline.run(session.candidates, body.query, send_progress)
        finally:
            loop.call_soon_threadsafe(queue.put_nowait, _STREAM_END)

    async def event_generator():
        worker = loop.run_in_executor(None, run_pipeline)
        try:
            while True:
                data = await queue.get()
                if data is _STREAM_END:
                    break
                yield f"data: {json.dumps(data)}\n\n"
            await worker
        except asyncio.CancelledError:
            logger.info(f"SSE connection cancelled for {body.session_id}")
            raise
        finally:
            logger.info(f"SSE connection closed for {body.session_id}")

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
            "Connection": "keep-alive",
        }
    )
