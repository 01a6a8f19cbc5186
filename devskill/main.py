# devskill/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints import analysis, skills, telemetry
from .core.config import get_settings
from .core.log_config import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="DevSkill Tracker Core", version="1.0.0")

# CORS for the dashboard
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(telemetry.router)
app.include_router(analysis.router)
app.include_router(skills.router)

@app.get("/")
async def root():
    return {"message": "DevSkill Tracker Core API", "version": "1.0.0"}

@app.get("/health")
async def health():
    return {"status": "healthy", "service": "devskill"}


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
