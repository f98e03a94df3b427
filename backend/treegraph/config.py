import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./treegraph.db")
DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", "5"))
DB_CONNECT_DELAY = float(os.getenv("DB_CONNECT_DELAY", "2"))

SEED_ON_STARTUP = _env_bool("SEED_ON_STARTUP", True)
SEED_DATA_PATH = os.getenv(
    "SEED_DATA_PATH",
    str(Path(__file__).resolve().parent / "db" / "sample_data.yaml"),
)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

CANVAS_WIDTH = float(os.getenv("CANVAS_WIDTH", "960"))
CANVAS_HEIGHT = float(os.getenv("CANVAS_HEIGHT", "600"))
CANVAS_MARGIN = float(os.getenv("CANVAS_MARGIN", "60"))

# drop | error
ORPHAN_POLICY = os.getenv("ORPHAN_POLICY", "drop")
# error | first
ROOT_POLICY = os.getenv("ROOT_POLICY", "error")

GRAPH_API_URL = os.getenv("GRAPH_API_URL", "http://localhost:8000")
GRAPH_API_TIMEOUT = float(os.getenv("GRAPH_API_TIMEOUT", "10"))

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
