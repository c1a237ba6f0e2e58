from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.database.database import status_collection, vehicle_collection
from app.services.errors import ValidationError
from app.services.status_service import StatusService
from app.services.vehicle_ledger import VehicleLedger

Body = TypeVar("Body", bound=BaseModel)


def get_status_service() -> StatusService:
    return StatusService(status_collection())


def get_vehicle_ledger() -> VehicleLedger:
    return VehicleLedger(vehicle_collection())


async def form_or_json(request: Request) -> dict:
    """Cuerpo de la petición como dict: JSON o formulario HTML del kiosko."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise ValidationError("Malformed JSON body")
        if not isinstance(data, dict):
            raise ValidationError("Request body must be an object")
        return data
    if not content_type:
        return {}
    form = await request.form()
    return dict(form)


def parse_body(model: Type[Body], data: dict) -> Body:
    try:
        return model(**data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid request body: {e.errors()[0].get('msg')}")
