from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health")
def health():
    """Liveness probe"""
    return {"status": "UP"}
