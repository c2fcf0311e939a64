from fastapi import APIRouter

from ..services.unit_registry import MASS_UNITS, VOLUME_UNITS

router = APIRouter()


@router.get("/ready")
def ready():
    return {"ok": True, "units": len(VOLUME_UNITS) + len(MASS_UNITS)}
