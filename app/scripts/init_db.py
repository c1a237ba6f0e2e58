import logging

from pymongo import ASCENDING, DESCENDING

from app.database.database import ping, vehicle_collection

logger = logging.getLogger(__name__)


def init_db():
    if not ping():
        raise RuntimeError("MongoDB no responde; revise MONGO_URI")
    vehicles = vehicle_collection()
    vehicles.create_index([("vehicleNumber", ASCENDING)], unique=True)
    vehicles.create_index([("timestamp", DESCENDING)])
    # La colección de estado sólo guarda el documento _id="status"; no necesita índices
    print("✅ Índices creados correctamente")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
