"""FastAPI application for the Adeline GenUI backend."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import genui_router


app = FastAPI(
    title="Adeline GenUI API",
    description="Composes interactive Journal Pages for an AI tutor",
    version="0.1.0",
)

# Configure CORS for the Next.js front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:3001",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(genui_router)


@app.get("/")
def root() -> dict:
    """Root endpoint."""
    return {"message": "Adeline GenUI API", "version": "0.1.0"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}
