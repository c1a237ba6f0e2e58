# models.py
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union
from datetime import datetime


class ChargerStatus(str, Enum):
    CONNECTED = "Connected"
    CHARGING = "Charging"
    FINISHED = "Finished"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ChargerStatus"]:
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def is_expected_transition(cls, previous: Optional[str], new: str) -> bool:
        """Indica si el paso previous -> new sigue el ciclo de carga.

        Estados desconocidos nunca son "esperados"; el llamador decide qué hacer
        (el servicio sólo lo registra en el log).
        """
        target = cls.parse(new)
        if target is None:
            return False
        if previous is None:
            return True
        origin = cls.parse(previous)
        if origin is None:
            return False
        return target == origin or target in EXPECTED_TRANSITIONS[origin]


EXPECTED_TRANSITIONS = {
    ChargerStatus.CONNECTED: {ChargerStatus.CHARGING, ChargerStatus.FINISHED},
    ChargerStatus.CHARGING: {ChargerStatus.FINISHED},
    ChargerStatus.FINISHED: {ChargerStatus.CONNECTED},
}


class StatusRecord(BaseModel):
    """Documento único de estado del cargador (_id = "status")"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field("status", alias="_id")
    status: Optional[str] = None
    voltage: Optional[float] = None
    current: Optional[float] = None
    receivedAt: Optional[datetime] = None


class VehicleRecord(BaseModel):
    """Pago y tiempo restante de un vehículo (_id = vehicleNumber)"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    vehicleNumber: str
    vehicleModel: str = ""
    amount: float
    totaltime: Union[int, float]
    reminingtime: Union[int, float]
    timestamp: Optional[datetime] = None


# ---- Cuerpos de petición ----
# Los valores numéricos llegan como texto desde los formularios del kiosko;
# el parseo y la validación se hacen en los servicios.

class StatusBody(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    status: Optional[str] = None
    voltage: Optional[Union[float, str]] = None
    current: Optional[Union[float, str]] = None


class PaymentBody(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    vehicleNumber: Optional[str] = None
    vehicleModel: Optional[str] = ""
    amount: Optional[Union[float, str]] = None


class UpdateTimeBody(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    vehicleNumber: Optional[str] = None
    reminingtime: Optional[Union[float, str]] = None
