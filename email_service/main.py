import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv

from exceptions.exceptions import add_exception_handlers
from email_service.internal_messaging import (
    cleanup_messaging,
    rabbitmq_manager,
    setup_messaging,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.testing = app.state.testing if hasattr(app.state, "testing") else False

    if not app.state.testing:
        await setup_messaging()
    yield
    if not app.state.testing:
        await cleanup_messaging()


app = FastAPI(
    title="Book Project Email Service",
    lifespan=lifespan,
    description="Delivers account notifications queued by the book project API",
    version="1.0.0",
)

add_exception_handlers(app)


@app.get("/health")
def health():
    return {"status": "ok", "consuming": rabbitmq_manager.consuming}


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("EMAIL_SERVICE_PORT", "8081"))
    logger.info(f"Starting email service on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
