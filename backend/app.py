from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend import config
from backend.routers import build, worlds

app = FastAPI(
    title="WorldBuilder API",
    description="Backend API for the WorldBuilder OpenStreetMap world generator",
    version="0.1.0",
)

# ---------------------------------------------------------------------------
# CORS -- allow the frontend dev server
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(build.router)
app.include_router(worlds.router)

# ---------------------------------------------------------------------------
# Static files -- serve generated world files for download
# ---------------------------------------------------------------------------
config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/output", StaticFiles(directory=str(config.OUTPUT_DIR)), name="output")


@app.get("/")
async def root():
    return {"status": "ok", "service": "WorldBuilder API"}
