"""
HintTutor Server - FastAPI application for hint-by-hint tutoring.

Provides:
- Hint sessions (first hint → next hints → optional full solution)
- Request logs for development inspection
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Query
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os

# Import lib modules
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from api.hints import router as hints_router, request_logger
from lib.completion_client import CompletionClient
from lib.config import Settings
from lib.hint_session import HintSessionMachine
from lib.mock_responses import ScriptedCompletionClient
from lib.session_store import SessionStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

SERVICE_NAME = "hint-tutor"
VERSION = "1.0.0"


def build_completion_client(settings: Settings):
    """Real completion client, or the scripted one when LLM_MOCK is set."""
    if settings.llm_mock:
        return ScriptedCompletionClient()
    return CompletionClient(
        api_key=settings.llm_api_key,
        model=settings.model,
        url=settings.llm_api_url,
        timeout=settings.llm_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire config, session store and completion client at startup."""
    settings = Settings.from_env()
    print(f"[Startup] Model: {settings.model} ({'mock' if settings.llm_mock else settings.llm_api_url})")

    client = build_completion_client(settings)
    app.state.settings = settings
    app.state.hint_sessions = HintSessionMachine(client=client, store=SessionStore())

    print("[Startup] Ready!")

    yield

    print("[Shutdown] Cleaning up...")
    await client.close()


app = FastAPI(
    title="HintTutor Server",
    description="Hint-by-hint tutoring mediator for the HintTutor browser extension",
    version=VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(hints_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 with the offending field."""
    errors = exc.errors()
    field = errors[0]["loc"][-1] if errors and errors[0].get("loc") else "body"
    location = errors[0]["loc"][0] if errors and errors[0].get("loc") else "body"
    return JSONResponse(
        status_code=400,
        content={"detail": f"Missing or invalid '{field}' in {location}"},
    )


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    hint_sessions = getattr(request.app.state, "hint_sessions", None)
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": VERSION,
        "sessions": len(hint_sessions.store) if hint_sessions else 0,
    }


@app.get("/logs")
async def get_logs(limit: int = Query(default=100, ge=1, le=1000)):
    """Recent hint session requests, most recent first."""
    return {"logs": request_logger.get_logs(limit)}


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(app, host=settings.host, port=settings.port)
