
import logging
from src.app.config import settings
from src.app.logging_setup import configure_logging
configure_logging()
from src.app.server import app

if __name__ == "__main__":
    import uvicorn
    logging.info(f"Server running on http://localhost:{settings.port}")
    if settings.reload:
        uvicorn.run("src.app.server:app", host=settings.host, port=settings.port, reload=True, log_level=settings.log_level.lower())
    else:
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
