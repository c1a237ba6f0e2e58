from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from typing import Optional
from urllib.parse import quote
import logging

from app.api.deps import form_or_json, get_status_service, get_vehicle_ledger, parse_body
from app.models.models import PaymentBody, UpdateTimeBody
from app.services.errors import StoreError, ValidationError
from app.services.status_service import StatusService
from app.services.vehicle_ledger import VehicleLedger

logger = logging.getLogger(__name__)

router = APIRouter()

WAITING_PAGE = "/waiting.html"


@router.post("/pay", tags=["vehicles"])
def pay(
    data: dict = Depends(form_or_json),
    ledger: VehicleLedger = Depends(get_vehicle_ledger),
):
    """
    Registra el pago y redirige a la cuenta atrás.
    Si el vehículo aún tiene tiempo restante, los minutos nuevos se suman.
    """
    try:
        body = parse_body(PaymentBody, data)
        vehicle = ledger.pay(body.vehicleNumber, body.vehicleModel, body.amount)
    except ValidationError as e:
        return PlainTextResponse(str(e), status_code=400)
    except StoreError:
        logger.exception("Error procesando el pago")
        return PlainTextResponse("Error saving data", status_code=500)

    return RedirectResponse(
        url=f"{WAITING_PAGE}?vehicleNumber={quote(vehicle.vehicleNumber)}",
        status_code=302,
    )


@router.get("/api/get-vehicle", tags=["vehicles"])
def get_vehicle(
    vehicleNumber: Optional[str] = None,
    ledger: VehicleLedger = Depends(get_vehicle_ledger),
):
    try:
        vehicle = ledger.get(vehicleNumber)
    except StoreError:
        logger.exception("Error obteniendo vehículo")
        return JSONResponse({"success": False, "message": "Database error"}, status_code=500)
    if vehicle is None:
        return {"success": False, "message": "Vehicle not found"}
    return {"success": True, "vehicle": vehicle.model_dump(mode="json", by_alias=True)}


def finish_session(service: StatusService):
    """Tarea en segundo plano: su fallo no afecta a la respuesta ya enviada."""
    try:
        service.finish()
    except StoreError:
        logger.exception("No se pudo marcar el estado como Finished")


@router.post("/api/update-time", tags=["vehicles"])
def update_time(
    background_tasks: BackgroundTasks,
    data: dict = Depends(form_or_json),
    ledger: VehicleLedger = Depends(get_vehicle_ledger),
    status_service: StatusService = Depends(get_status_service),
):
    try:
        body = parse_body(UpdateTimeBody, data)
        finished = ledger.update_remaining_time(body.vehicleNumber, body.reminingtime)
    except ValidationError as e:
        return JSONResponse({"success": False, "message": str(e)}, status_code=400)
    except StoreError:
        logger.exception("Error actualizando tiempo")
        return JSONResponse({"success": False, "message": "Error updating time"}, status_code=500)

    if finished:
        background_tasks.add_task(finish_session, status_service)
    return {"success": True, "message": "Remaining time updated"}
