"""API route handlers."""

from .upload import router as upload_router
from .process import router as process_router
from .export import router as export_router
from .session import router as session_router
