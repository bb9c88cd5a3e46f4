from pydantic import BaseModel
import os
from dotenv import load_dotenv
from pathlib import Path
from typing import List

ROOT = Path(__file__).resolve().parents[2]
load_dotenv(ROOT / ".env")


def _split_csv(raw: str) -> List[str]:
    items = [p.strip() for p in (raw or "").split(",")]
    return [p for p in items if p] or ["*"]


def _as_bool(raw: str) -> bool:
    return str(raw or "").strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    service_name: str = os.getenv("SERVICE_NAME", "TicketStore")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000") or 5000)
    data_dir: str = os.getenv("DATA_DIR", "json_data")
    tickets_file: str = os.getenv("TICKETS_FILE", "tickets.json")
    cors_origins: List[str] = _split_csv(os.getenv("CORS_ORIGINS", "*"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    reload: bool = _as_bool(os.getenv("RELOAD", "false"))

    def data_path(self) -> Path:
        """Directorio de datos; si es relativo se resuelve contra la raíz del repo."""
        p = Path(self.data_dir)
        return p if p.is_absolute() else ROOT / p


settings = Settings()
