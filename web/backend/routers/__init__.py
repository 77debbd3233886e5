"""API route handlers."""

from .matching import router as matching_router
from .talents import router as talents_router
from .jobs import router as jobs_router
from .queues import router as queues_router
