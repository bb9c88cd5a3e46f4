import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from pydantic import BaseModel

from ..app.config import settings
from ..storage.ticket_store import TicketStore, WriteResult

router = APIRouter(prefix="/tickets", tags=["tickets"])
_store = TicketStore(settings.data_path(), settings.tickets_file)

PERSISTED_HEADER = "X-Ticket-Persisted"


class StatusUpdate(BaseModel):
    status: Any = None


def get_store() -> TicketStore:
    return _store


def _mark(response: Response, res: WriteResult) -> None:
    # El cuerpo no cambia si falló la escritura; solo se informa en el header
    response.headers[PERSISTED_HEADER] = "true" if res.persisted else "false"
    if not res.persisted:
        logging.warning(f"Ticket {res.ticket.get('id')!r} accepted but not persisted")


@router.get("")
def list_tickets(store: TicketStore = Depends(get_store)):
    logging.info("Fetching tickets...")
    data = store.list_tickets()
    logging.debug(f"Tickets data: {data}")
    return data


@router.post("", status_code=201)
def create_ticket(response: Response, candidate: Any = Body(default=None), store: TicketStore = Depends(get_store)):
    res = store.create(candidate)
    if res is None:
        logging.info(f"Create rejected, missing fields: {store.missing_fields(candidate)}")
        raise HTTPException(status_code=400, detail="Missing required fields")
    _mark(response, res)
    logging.info(f"Ticket created id={res.ticket.get('id')!r}")
    return {"message": "Ticket added successfully", "newTicket": res.ticket}


@router.patch("/{ticket_id}")
def update_status(ticket_id: str, response: Response, payload: Optional[StatusUpdate] = None, store: TicketStore = Depends(get_store)):
    new_status = payload.status if payload else None
    # Validar el estado antes de buscar: 400 tiene prioridad sobre 404
    if not store.is_present(new_status):
        raise HTTPException(status_code=400, detail="Status is required")
    res = store.update_status(ticket_id, new_status)
    if res is None:
        logging.info(f"Update status: ticket {ticket_id!r} not found")
        raise HTTPException(status_code=404, detail="Ticket not found")
    _mark(response, res)
    logging.info(f"Ticket {ticket_id!r} status -> {new_status!r}")
    return {"message": "Ticket status updated", "ticket": res.ticket}


@router.delete("/{ticket_id}")
def delete_ticket(ticket_id: str, response: Response, store: TicketStore = Depends(get_store)):
    res = store.delete(ticket_id)
    if res is None:
        logging.info(f"Delete: ticket {ticket_id!r} not found")
        raise HTTPException(status_code=404, detail="Ticket not found")
    _mark(response, res)
    logging.info(f"Ticket {ticket_id!r} deleted")
    return {"message": "Ticket deleted successfully", "deletedTicket": [res.ticket]}
