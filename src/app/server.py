import logging
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from .config import settings
from ..connectors.tickets_router import router as tickets_router, get_store
from ..storage.ticket_store import TicketStore

app = FastAPI(title="Ticket Store API")

# El front-end se sirve desde otro origen: permitir cualquiera por defecto
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Ticket-Persisted"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error(req: Request, exc: StarletteHTTPException):
    """Todas las respuestas de error usan el cuerpo {"error": <mensaje>}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error(req: Request, exc: RequestValidationError):
    logging.info(f"Invalid request body on {req.method} {req.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.get("/health")
def health(store: TicketStore = Depends(get_store)):
    return {"status": "ok", "service": settings.service_name, "tickets_file": str(store.file)}


app.include_router(tickets_router)
