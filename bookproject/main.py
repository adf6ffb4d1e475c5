import os
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from exceptions.exceptions import add_exception_handlers
from bookproject.api import book_router, user_router
from bookproject.models import Base
from bookproject.storage import engine
from bookproject.internal_message import setup_messaging, cleanup_messaging

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.testing = app.state.testing if hasattr(app.state, "testing") else False

    if not app.state.testing:
        Base.metadata.create_all(bind=engine)
        await setup_messaging(app)
    yield
    if not app.state.testing:
        await cleanup_messaging(app)


app = FastAPI(
    title="Book Project API",
    lifespan=lifespan,
    description="Keep track of the books you want to read, are reading, have read or did not finish",
    version="1.0.0",
)

add_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_router)
app.include_router(book_router)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("BOOKPROJECT_PORT", "8080"))
    logger.info(f"Starting book project server on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
