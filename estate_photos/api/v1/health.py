from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/up")
def health_check():
    """Liveness probe. Returns 200 while the process is serving requests."""
    return {"status": "ok"}
