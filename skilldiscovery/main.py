# skilldiscovery/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from skilldiscovery.config import settings
from skilldiscovery.database import Base, engine
from skilldiscovery import models  # noqa: F401  (registers tables)
from skilldiscovery.api import skills

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="SkillSwap Discovery API")

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers
app.include_router(skills.router)  # /skills/*


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "SkillSwap Discovery API is running",
        "version": "1.0.0",
        "environment": settings.APP_ENV,
    }
