# employee-directory-api/app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.graphql.schema import graphql_router
from app.core.config import settings
from app.core.logging_config import setup_logging
from app.db import models
from app.db.session import SessionLocal, engine
from app.services.seed import seed_database

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    models.Base.metadata.create_all(bind=engine)
    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()
    logger.info("Employee Directory API ready")
    yield


app = FastAPI(title="Employee Directory API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Single GraphQL endpoint; auth rides on the session cookie
app.include_router(graphql_router, prefix="/graphql")

@app.get("/")
def read_root():
    return {"message": "Welcome to the Employee Directory API"}
