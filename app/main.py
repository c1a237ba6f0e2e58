from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import logging
import os

from app.api import router as api_router
from app.api.pages import PUBLIC_DIR
from app.database.database import ping
from app.services.errors import ValidationError

# ==== Logging policy ====
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Reduce noisy third‑party loggers
for name in ("pymongo", "uvicorn", "uvicorn.error"):
    logging.getLogger(name).setLevel(max(LOG_LEVEL, logging.INFO))

# Access log (una línea por petición); el kiosko sondea cada segundo
if os.getenv("ACCESS_LOG_DISABLED", "false").lower() == "true":
    al = logging.getLogger("uvicorn.access")
    al.setLevel(logging.CRITICAL)
    al.propagate = False
    al.disabled = True
    al.handlers = []

logger = logging.getLogger(__name__)

app = FastAPI(title="EV Kiosk Backend")

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse({"success": False, "message": str(exc)}, status_code=400)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"success": False, "message": "Invalid request"}, status_code=400)


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok", "database": ping()}


# Rutas: portada, estado y vehículos
app.include_router(api_router)


@app.on_event("startup")
def startup_event():
    """Comprueba MongoDB al arrancar; el servidor sigue levantado aunque falle."""
    if ping():
        logger.info("✅ Conectado a MongoDB")
    else:
        logger.error("⚠️ MongoDB no disponible; las rutas devolverán 500 hasta que responda")


# Servir páginas del kiosko (waiting.html, css, js...) después de las rutas
app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="frontend")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "3000")))
