import os
import logging

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    datefmt="%H:%M:%S",
)
# The OpenAI client logs every request through httpx
for noisy in ("httpx", "httpcore", "openai"):
    logging.getLogger(noisy).setLevel(logging.WARNING)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from styleprint.routes.design import router as design_router
from styleprint.services.generator import DEFAULT_MODEL

app = FastAPI(
    title="Styleprint API",
    description="Extract design tokens and UI components from HTML/CSS source",
    version="0.1.0",
)

allowed_origins = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(design_router)


@app.get("/")
def root():
    return {"message": "Styleprint API is running", "endpoints": ["/api/extract", "/api/design-system"]}


@app.get("/health")
def health():
    """Extraction always works; generation needs an OpenRouter key."""
    return {
        "status": "ok",
        "generation": {
            "configured": bool(os.getenv("OPENROUTER_API_KEY")),
            "model": os.getenv("DESIGN_SYSTEM_MODEL", DEFAULT_MODEL),
        },
    }
