"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reqplan.config import get_settings
from reqplan.logging_config import configure_logging
from reqplan.routers import dashboard, estimates, hierarchy

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    yield


app = FastAPI(
    title="Requirement Estimation & Delivery Projection",
    description="Per-requirement estimates, dependency hierarchy, portfolio KPIs and delivery calendar projection",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(estimates.router)
app.include_router(hierarchy.router)
app.include_router(dashboard.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
