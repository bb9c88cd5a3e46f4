import logging

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configura el logger raíz una sola vez para todo el proceso.

    El nivel sale de LOG_LEVEL (settings.log_level) salvo que se pase explícito.
    Un nivel desconocido cae a INFO.
    """
    name = (level or settings.log_level or "INFO").upper()
    lvl = getattr(logging, name, None)
    if not isinstance(lvl, int):
        lvl = logging.INFO
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    # uvicorn trae sus propios handlers; alinear el nivel
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(lvl)
