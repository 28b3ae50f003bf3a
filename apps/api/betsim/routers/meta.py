from fastapi import APIRouter

from apps.api.betsim.core.config import SUPPORTED_SPORTS

router = APIRouter(prefix="", tags=["meta"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/sports")
def list_sports():
    return {"sports": sorted(SUPPORTED_SPORTS)}
