import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mapbox_geocoder.api.endpoints import geocoding, health
from mapbox_geocoder.core.config import settings

logging.basicConfig(level=logging.INFO)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="", tags=["health"])

app.include_router(geocoding.router, prefix="/geocoding", tags=["geocoding"])
