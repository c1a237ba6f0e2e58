# vehicle_ledger.py
from datetime import datetime, timezone
from typing import Optional
import logging
import math

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.models.models import VehicleRecord
from app.services.errors import StoreError, ValidationError
from app.services.parsing import as_stored_number, is_blank, parse_number

logger = logging.getLogger(__name__)

# Cada 10 unidades de moneda compran 1 minuto de carga
AMOUNT_PER_MINUTE = 10


def purchased_minutes(amount: float) -> int:
    """Minutos comprados con `amount` (truncado, no redondeado)"""
    return math.floor(amount / AMOUNT_PER_MINUTE)


def parse_amount(amount) -> float:
    try:
        value = parse_number(amount, "amount")
    except ValidationError:
        raise ValidationError("Invalid amount") from None
    if value <= 0:
        raise ValidationError("Invalid amount")
    return value


class VehicleLedger:
    """Un documento por vehículo (_id = vehicleNumber) con el tiempo pagado.

    El pago es lectura + escritura no atómica: dos pagos simultáneos del mismo
    vehículo pueden perder una actualización.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def pay(self, vehicle_number, vehicle_model, amount) -> VehicleRecord:
        value = parse_amount(amount)
        if is_blank(vehicle_number):
            raise ValidationError("Missing vehicleNumber")
        vehicle_number = str(vehicle_number).strip()
        minutes = purchased_minutes(value)

        try:
            existing = self.collection.find_one({"_id": vehicle_number})
        except PyMongoError as e:
            raise StoreError("Error fetching vehicle") from e

        remaining = existing.get("reminingtime", 0) if existing else 0
        if remaining > 0:
            # Aún le queda tiempo: se acumula sobre lo restante
            new_time = remaining + minutes
        else:
            new_time = minutes
        new_time = as_stored_number(new_time)

        update = {
            "vehicleNumber": vehicle_number,
            "vehicleModel": "" if vehicle_model is None else str(vehicle_model),
            "amount": as_stored_number(value),
            "totaltime": new_time,
            "reminingtime": new_time,
            "timestamp": datetime.now(timezone.utc),
        }
        try:
            doc = self.collection.find_one_and_update(
                {"_id": vehicle_number},
                {"$set": update},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError("Error saving vehicle") from e

        logger.info(
            f"Pago registrado: {vehicle_number} amount={value} +{minutes} min "
            f"(restante {remaining} -> {new_time})"
        )
        return VehicleRecord(**doc)

    def get(self, vehicle_number) -> Optional[VehicleRecord]:
        if is_blank(vehicle_number):
            return None
        try:
            doc = self.collection.find_one({"_id": str(vehicle_number).strip()})
        except PyMongoError as e:
            raise StoreError("Error fetching vehicle") from e
        return VehicleRecord(**doc) if doc else None

    def update_remaining_time(self, vehicle_number, reminingtime) -> bool:
        """Sobrescribe reminingtime sin límites; devuelve True si la sesión terminó (<= 0)."""
        if is_blank(vehicle_number):
            raise ValidationError("Missing vehicleNumber")
        if is_blank(reminingtime):
            raise ValidationError("Invalid reminingtime")
        remaining = as_stored_number(parse_number(reminingtime, "reminingtime"))
        vehicle_number = str(vehicle_number).strip()

        try:
            result = self.collection.update_one(
                {"_id": vehicle_number}, {"$set": {"reminingtime": remaining}}
            )
        except PyMongoError as e:
            raise StoreError("Error updating time") from e

        if result.matched_count == 0:
            logger.warning(f"update-time para vehículo desconocido: {vehicle_number}")
        return remaining <= 0
