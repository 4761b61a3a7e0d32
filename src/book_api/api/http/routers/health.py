"""Health check endpoints router for monitoring service availability."""

from fastapi import APIRouter

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness check that returns 200 OK as long as the application
    process is running.
    """
    return {"status": "healthy", "service": "book-api"}
