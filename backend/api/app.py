"""FastAPI application entrypoint."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.routes import frost
from backend.api.routes import geocode
from backend.api.routes import savings

app = FastAPI(title="Cabin Winter Savings API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(geocode.router, prefix="/geocode", tags=["geocode"])
app.include_router(frost.router, prefix="/frost", tags=["frost"])
app.include_router(savings.router, prefix="/savings", tags=["savings"])


@app.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    """Simple health endpoint for uptime probes."""
    return {"status": "ok"}
