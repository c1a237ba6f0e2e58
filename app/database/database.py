from pymongo import MongoClient
from pymongo.collection import Collection
import os
import logging
from dotenv import load_dotenv
import certifi
from urllib.parse import quote_plus

# Carga variables desde .env si está presente
load_dotenv()

logger = logging.getLogger(__name__)

# URI; permitimos construirla desde componentes para manejar passwords con encoding
MONGO_URI = os.getenv("MONGO_URI")
if not MONGO_URI:
    user = os.getenv("MONGO_USER")
    password = os.getenv("MONGO_PASSWORD")
    host = os.getenv("MONGO_HOST")  # p.ej. cluster0.abcde.mongodb.net
    if user and password and host:
        params = os.getenv("MONGO_OPTIONS", "retryWrites=true&w=majority")
        MONGO_URI = f"mongodb+srv://{quote_plus(user)}:{quote_plus(password)}@{host}/?{params}"
    else:
        MONGO_URI = "mongodb://localhost:27017"

MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))
DB_NAME = os.getenv("DB_NAME", "myevdata")
STATUS_COLLECTION = os.getenv("STATUS_COLLECTION", "status")
VEHICLE_COLLECTION = os.getenv("VEHICLE_COLLECTION", "myevdata")


def _client_options() -> dict:
    opts = {"serverSelectionTimeoutMS": MONGO_TIMEOUT_MS}
    if MONGO_URI.startswith("mongodb+srv://"):
        # cadena de certificados válida para Atlas
        opts["tlsCAFile"] = certifi.where()
    return opts


# El cliente no abre conexión hasta la primera operación
client = MongoClient(MONGO_URI, **_client_options())
db = client[DB_NAME]


def ping() -> bool:
    """Comprueba que el servidor Mongo responde"""
    try:
        client.admin.command("ping")
        return True
    except Exception as e:
        logger.error(f"No se pudo conectar a MongoDB: {e}")
        return False


def get_collection(name: str) -> Collection:
    """Devuelve una colección de MongoDB por nombre"""
    return db[name]


def status_collection() -> Collection:
    return db[STATUS_COLLECTION]


def vehicle_collection() -> Collection:
    return db[VEHICLE_COLLECTION]
