"""FastAPI server for the Language Buddy tutor."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from rich.console import Console
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from buddy.config import Config
from buddy.languages import LANGUAGES
from buddy.pronunciation.scoring import PRACTICE_PHRASES, PronunciationRequest, score_pronunciation
from buddy.tutor.errors import GENERIC_ERROR_MESSAGE, TutorError
from buddy.tutor.models import ErrorBody, TutoringReply, TutoringRequest
from buddy.tutor.service import TutorService


console = Console()
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": (
        "authorization, x-client-info, apikey, content-type, x-supabase-client-platform, "
        "x-supabase-client-platform-version, x-supabase-client-runtime, "
        "x-supabase-client-runtime-version"
    ),
}

# How often a pending tutor request checks whether its client went away
DISCONNECT_POLL_SECONDS = 0.5

# Non-standard status used when the client disconnected mid-request
CLIENT_CLOSED_REQUEST = 499


class ClientDisconnected(Exception):
    """The client went away before the reply was ready."""


class CORSHeadersMiddleware:
    """Answers preflight requests and adds CORS headers to every response."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            response = Response(status_code=200, headers=CORS_HEADERS)
            await response(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).update(CORS_HEADERS)
            await send(message)

        await self.app(scope, receive, send_with_cors)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(ErrorBody(error=message).model_dump(), status_code=status_code)


def _is_json(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == "application/json"


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


async def _run_until_disconnected(request: Request, coro):
    """Await coro, cancelling it if the client disconnects first."""
    work = asyncio.ensure_future(coro)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    done = set()
    try:
        done, _ = await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watcher.cancel()
        if work not in done:
            work.cancel()

    watcher_error = watcher.exception() if watcher in done else None
    if work in done:
        return work.result()

    if watcher_error is not None:
        # Disconnect detection failed, so the client may still be waiting
        logger.error(f"Disconnect check failed: {watcher_error!r}")
        raise watcher_error
    raise ClientDisconnected()


def create_app(tutor: TutorService | None = None) -> FastAPI:
    """Create the FastAPI app.

    Args:
        tutor: Service handling tutoring requests. When omitted it is built
            from environment configuration at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.tutor is None:
            config = Config.from_env()
            if not config.gateway_api_key:
                console.print("[yellow]Warning: LOVABLE_API_KEY not set, tutor requests will fail[/yellow]")
            app.state.tutor = TutorService.from_config(config)
        console.print("[green]Tutor server initialized[/green]")
        yield
        console.print("[yellow]Tutor server shutting down[/yellow]")

    app = FastAPI(title="Language Buddy", lifespan=lifespan)
    app.state.tutor = tutor
    app.add_middleware(CORSHeadersMiddleware)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return _error_response(400, "Invalid request body")

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/languages")
    async def languages():
        """List supported target languages."""
        return [language.to_dict() for language in LANGUAGES.values()]

    @app.post("/tutor")
    async def tutor_reply(request: Request):
        """Reply to a learner message as the chat tutor."""
        if not _is_json(request):
            return _error_response(415, "Content-Type must be application/json")

        try:
            payload = await request.json()
            tutoring_request = TutoringRequest.model_validate(payload)
        except ValueError as e:
            # Covers undecodable JSON and pydantic validation errors
            logger.info(f"Rejected tutor request: {e}")
            return _error_response(400, "Invalid request body")

        service: TutorService = request.app.state.tutor
        try:
            reply = await _run_until_disconnected(request, service.reply(tutoring_request))
        except ClientDisconnected:
            console.print("[yellow]Client disconnected, cancelled tutor request[/yellow]")
            return _error_response(CLIENT_CLOSED_REQUEST, "Client closed request")
        except TutorError as e:
            logger.warning(f"Tutor request failed ({e.status_hint.value}): {e}")
            return _error_response(e.status_code, e.public_message)
        except Exception:
            logger.exception("Unexpected tutor error")
            return _error_response(500, GENERIC_ERROR_MESSAGE)

        return TutoringReply(reply=reply).model_dump()

    @app.get("/pronunciation/phrases")
    async def pronunciation_phrases():
        """List the practice phrases for the pronunciation lab."""
        return [phrase.to_dict() for phrase in PRACTICE_PHRASES]

    @app.post("/pronunciation/score")
    async def pronunciation_score(payload: PronunciationRequest):
        """Score a speech transcript against its target phrase."""
        try:
            result = score_pronunciation(payload.target, payload.transcript)
        except ValueError as e:
            return _error_response(400, str(e))
        return result.to_dict()

    return app


app = create_app()
