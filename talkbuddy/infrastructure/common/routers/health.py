from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness probe; does not touch the database or the inference service."""
    return {"status": "ok"}
