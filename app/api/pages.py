from pathlib import Path
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
import logging
import os

from app.api.deps import get_status_service
from app.models.models import ChargerStatus
from app.services.errors import StoreError
from app.services.status_service import StatusService

logger = logging.getLogger(__name__)

PUBLIC_DIR = os.getenv("PUBLIC_DIR", str(Path(__file__).resolve().parents[2] / "public"))

router = APIRouter()


@router.get("/", include_in_schema=False)
def root(service: StatusService = Depends(get_status_service)):
    """Página de perfil si el vehículo está conectado; si no, la portada."""
    page = "index.html"
    try:
        record = service.get()
        if record is not None and record.status == ChargerStatus.CONNECTED.value:
            page = "profile.html"
    except StoreError:
        logger.exception("Error leyendo estado para la portada")
    return FileResponse(os.path.join(PUBLIC_DIR, page))
