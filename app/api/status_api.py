from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from app.api.deps import form_or_json, get_status_service, parse_body
from app.models.models import StatusBody
from app.services.errors import StoreError, ValidationError
from app.services.status_service import StatusService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/status", tags=["status"])
def get_or_update_status(
    status: Optional[str] = None,
    voltage: Optional[str] = None,
    current: Optional[str] = None,
    service: StatusService = Depends(get_status_service),
):
    """
    Lee el estado del cargador o, si llega status/voltage/current en la query,
    lo actualiza (upsert) con esos campos.
    """
    updating = any(v is not None and v.strip() for v in (status, voltage, current))
    try:
        record = service.get_or_update(status=status, voltage=voltage, current=current)
    except ValidationError as e:
        return JSONResponse({"success": False, "message": str(e)}, status_code=400)
    except StoreError:
        logger.exception("Error en /api/status")
        return JSONResponse({"success": False, "message": "Server error"}, status_code=500)

    if record is None:
        return {"success": False, "message": "No status found"}

    out = {
        "success": True,
        "status": record.status,
        "voltage": record.voltage,
        "current": record.current,
    }
    if updating:
        out["message"] = "Status updated successfully"
    return out


@router.post("/api/status", tags=["status"])
def set_status(
    data: dict = Depends(form_or_json),
    service: StatusService = Depends(get_status_service),
):
    try:
        body = parse_body(StatusBody, data)
        service.set(body.status, voltage=body.voltage, current=body.current)
    except ValidationError as e:
        return JSONResponse({"success": False, "message": str(e)}, status_code=400)
    except StoreError:
        logger.exception("Error actualizando estado")
        return JSONResponse(
            {"success": False, "message": "Error updating status in database"},
            status_code=500,
        )
    return {"success": True, "message": "Status updated successfully"}
