"""Health check routes."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> dict[str, object]:
    """Readiness check endpoint.

    Reports which provider families have a credential configured.
    """
    registry = request.app.state.registry
    return {
        "status": "ready",
        "providers": {
            name: registry.get(name).has_credential
            for name in ("openai", "anthropic", "gemini")
            if registry.has(name)
        },
    }
