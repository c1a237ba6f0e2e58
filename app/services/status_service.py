# status_service.py
from datetime import datetime, timezone
from typing import Optional
import logging

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.models.models import ChargerStatus, StatusRecord
from app.services.errors import StoreError, ValidationError
from app.services.parsing import is_blank, parse_optional_number

logger = logging.getLogger(__name__)

STATUS_ID = "status"


class StatusService:
    """Estado único del cargador guardado en el documento _id="status".

    Los escritores concurrentes (hardware del kiosko y la UI) no se coordinan:
    gana el último y cada $set sólo toca los campos enviados.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def get(self) -> Optional[StatusRecord]:
        try:
            doc = self.collection.find_one({"_id": STATUS_ID})
        except PyMongoError as e:
            raise StoreError("Error fetching status") from e
        return StatusRecord(**doc) if doc else None

    def get_or_update(self, status=None, voltage=None, current=None) -> Optional[StatusRecord]:
        """Actualiza (upsert) con los parámetros presentes; sin parámetros es lectura pura."""
        update = self._build_update(status, voltage, current)
        if not update:
            return self.get()
        return self._upsert(update)

    def set(self, status, voltage=None, current=None) -> StatusRecord:
        if is_blank(status):
            raise ValidationError("Missing status in request body")
        return self._upsert(self._build_update(status, voltage, current))

    def finish(self) -> bool:
        """Marca la sesión como Finished sobre el documento existente (sin upsert)."""
        update = {"status": ChargerStatus.FINISHED.value, "receivedAt": _now()}
        try:
            before = self.collection.find_one_and_update(
                {"_id": STATUS_ID},
                {"$set": update},
                return_document=ReturnDocument.BEFORE,
            )
        except PyMongoError as e:
            raise StoreError("Error finishing status") from e
        if before is None:
            logger.warning("No hay documento de estado; no se marca Finished")
            return False
        self._check_transition(before.get("status"), update["status"])
        logger.info("Estado del cargador -> Finished")
        return True

    def _build_update(self, status, voltage, current) -> dict:
        update = {}
        if not is_blank(status):
            update["status"] = str(status).strip()
            update["receivedAt"] = _now()
        parsed_voltage = parse_optional_number(voltage, "voltage")
        if parsed_voltage is not None:
            update["voltage"] = parsed_voltage
        parsed_current = parse_optional_number(current, "current")
        if parsed_current is not None:
            update["current"] = parsed_current
        return update

    def _upsert(self, update: dict) -> StatusRecord:
        try:
            before = self.collection.find_one_and_update(
                {"_id": STATUS_ID},
                {"$set": update},
                upsert=True,
                return_document=ReturnDocument.BEFORE,
            )
        except PyMongoError as e:
            raise StoreError("Error updating status") from e

        if "status" in update:
            self._check_transition(before.get("status") if before else None, update["status"])

        after = dict(before or {"_id": STATUS_ID})
        after.update(update)
        return StatusRecord(**after)

    @staticmethod
    def _check_transition(previous: Optional[str], new: str):
        # No se rechaza: cualquier llamador puede fijar cualquier estado
        if not ChargerStatus.is_expected_transition(previous, new):
            logger.warning(f"Transición de estado inesperada: {previous!r} -> {new!r}")


def _now() -> datetime:
    return datetime.now(timezone.utc)
