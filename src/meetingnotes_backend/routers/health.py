# Health-check endpoints.

from fastapi import APIRouter, Depends, status

from ..settings import Settings, get_settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def read_health(
    settings: Settings = Depends(get_settings),
) -> dict[str, object]:
    """Readiness check that also reports which upstreams are configured."""
    return {
        "status": "ok",
        "summarization_configured": not settings.missing_summarization_fields(),
        "delivery_configured": not settings.missing_delivery_fields(),
    }
