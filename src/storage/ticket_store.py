from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import json
import logging
import threading
from typing import Any, Dict, List, Optional

REQUIRED_FIELDS = ("id", "customerName", "issueType")


@dataclass
class WriteResult:
    """Resultado de una mutación: el ticket afectado y si llegó a disco.

    persisted=False significa que la mutación se aceptó pero la escritura falló
    (ya quedó registrada en el log).
    """

    ticket: Dict[str, Any]
    persisted: bool


class TicketStore:
    """Colección de tickets persistida como un único documento JSON.

    Estructura JSON:
    {
      "tickets": [ {"id": str, "customerName": str, "issueType": str, "status": ..., ...} ]
    }

    Cada operación relee el archivo completo, aplica el cambio en memoria y
    reescribe el archivo entero. No hay caché entre peticiones: el archivo es
    la única fuente de verdad. Los ids no son únicos; las búsquedas devuelven
    la primera coincidencia.
    """

    def __init__(self, data_dir: Path, filename: str = "tickets.json"):
        self.dir = data_dir
        self.dir.mkdir(parents=True, exist_ok=True)
        self.file = self.dir / filename
        # lecturas y escrituras serializadas dentro del proceso
        self._lock = threading.Lock()

    @staticmethod
    def _empty() -> Dict[str, Any]:
        return {"tickets": []}

    def load(self) -> Dict[str, Any]:
        """Leer la colección completa. Nunca falla: ante cualquier error devuelve vacía."""
        if not self.file.exists():
            logging.info(f"{self.file.name} not found, returning empty collection")
            return self._empty()
        try:
            raw = self.file.read_text(encoding="utf-8")
            logging.debug(f"Reading {self.file}: {raw[:200]}")
            data = json.loads(raw)
        except Exception:
            logging.exception(f"Error reading {self.file}, returning empty collection")
            return self._empty()
        if not isinstance(data, dict) or not isinstance(data.get("tickets"), list):
            logging.warning(f"Unexpected document shape in {self.file}, returning empty collection")
            return self._empty()
        return data

    def save(self, data: Dict[str, Any]) -> bool:
        """Reescribir el archivo completo. Los errores se registran y no se propagan."""
        try:
            text = json.dumps(data, ensure_ascii=False, indent=2)
            self.file.write_text(text, encoding="utf-8")
        except (OSError, TypeError, ValueError):
            logging.exception(f"Error writing {self.file}")
            return False
        logging.debug(f"Data written to {self.file.name}: {len(data.get('tickets') or [])} tickets")
        return True

    @staticmethod
    def is_present(value: Any) -> bool:
        """Valor "presente" para el cliente web: listas y objetos vacíos cuentan como presentes."""
        if value is None or isinstance(value, bool):
            return bool(value)
        if isinstance(value, (int, float)):
            return value == value and value != 0
        if isinstance(value, str):
            return value != ""
        return True

    @classmethod
    def missing_fields(cls, candidate: Any) -> List[str]:
        if not isinstance(candidate, dict):
            return list(REQUIRED_FIELDS)
        return [f for f in REQUIRED_FIELDS if not cls.is_present(candidate.get(f))]

    @staticmethod
    def find_index(tickets: List[Dict[str, Any]], ticket_id: str) -> int:
        for i, t in enumerate(tickets):
            if isinstance(t, dict) and t.get("id") == ticket_id:
                return i
        return -1

    def list_tickets(self) -> Dict[str, Any]:
        # nunca leer un archivo a medio escribir
        with self._lock:
            return self.load()

    def create(self, candidate: Dict[str, Any]) -> Optional[WriteResult]:
        if self.missing_fields(candidate):
            return None
        with self._lock:
            data = self.load()
            data["tickets"].append(candidate)
            ok = self.save(data)
        return WriteResult(candidate, ok)

    def update_status(self, ticket_id: str, status: Any) -> Optional[WriteResult]:
        with self._lock:
            data = self.load()
            idx = self.find_index(data["tickets"], ticket_id)
            if idx == -1:
                return None
            ticket = data["tickets"][idx]
            ticket["status"] = status
            ok = self.save(data)
        return WriteResult(ticket, ok)

    def delete(self, ticket_id: str) -> Optional[WriteResult]:
        with self._lock:
            data = self.load()
            idx = self.find_index(data["tickets"], ticket_id)
            if idx == -1:
                return None
            # solo la primera coincidencia
            ticket = data["tickets"].pop(idx)
            ok = self.save(data)
        return WriteResult(ticket, ok)
