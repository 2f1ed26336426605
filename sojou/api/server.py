"""
api/server.py
-------------
FastAPI application entry point.

Run dev server:
    uvicorn sojou.api.server:app --reload --port 8000
    (or: sojou serve)

Endpoints:
    GET    /v1/health
    POST   /v1/itinerary/build
    POST   /v1/trips
    GET    /v1/trips/{session_id}
    GET    /v1/trips/{session_id}/deck
    POST   /v1/trips/{session_id}/swipe
    DELETE /v1/trips/{session_id}/activities/{activity_id}
    PUT    /v1/trips/{session_id}/config
    POST   /v1/trips/{session_id}/regenerate
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sojou import __version__
from sojou.api.routes import health, itinerary, trips

app = FastAPI(
    title="Sojou Trip Planner API",
    version=__version__,
    description=(
        "Swipe-to-plan backend. Turns a set of selected activities into a "
        "multi-day itinerary split into morning / afternoon / evening blocks."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# Allow the mobile / web client (any origin during development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router,    prefix="/v1",           tags=["Health"])
app.include_router(itinerary.router, prefix="/v1/itinerary", tags=["Itinerary"])
app.include_router(trips.router,     prefix="/v1/trips",     tags=["Trips"])


if __name__ == "__main__":
    import uvicorn
    from sojou import config
    uvicorn.run("sojou.api.server:app", host=config.API_HOST, port=config.API_PORT, reload=True)
