"""FastAPI proxy that injects the provider API key and relays chat requests.

The client never sees the key: it posts ``{"messages": [...]}`` or
``{"message": "..."}`` here and receives the provider's completion payload,
or ``{"error": "..."}`` on failure.
"""

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from quizbust import __version__
from quizbust.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    """One chat message."""

    role: str = Field(..., min_length=1)
    content: str


class ProxyRequest(BaseModel):
    """Body accepted by the relay endpoints."""

    messages: list[ChatMessage] | None = None
    message: str | None = None

    def to_messages(self) -> list[dict[str, str]]:
        """Normalise either request shape into a messages list."""
        if self.messages:
            return [m.model_dump() for m in self.messages]
        if self.message and self.message.strip():
            return [{"role": "user", "content": self.message}]
        return []


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the ``{"error": ...}`` response."""
    return JSONResponse(status_code=status_code, content={"error": message})


def upstream_error_message(response: httpx.Response) -> str:
    """Extract the provider's error message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return f"Provider returned HTTP {response.status_code}"


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Create the proxy application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        transport: Optional httpx transport for the upstream client

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(title="QuizBust Proxy", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected request body: %d error(s)", len(exc.errors()))
        return error_response("Invalid request body", 400)

    async def relay(body: ProxyRequest):
        messages = body.to_messages()
        if not messages:
            return error_response("No messages provided", 400)

        if not settings.api_key:
            logger.error("Provider API key is not configured")
            return error_response("Provider API key is not configured", 500)

        payload = {
            "model": settings.model_name,
            "messages": messages,
            "max_tokens": settings.max_tokens,
            "temperature": settings.default_temperature,
        }
        headers = {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
        }

        logger.info("Relaying %d message(s) to %s", len(messages), settings.completions_url)
        try:
            async with httpx.AsyncClient(
                timeout=settings.request_timeout, transport=transport
            ) as client:
                response = await client.post(
                    settings.completions_url, json=payload, headers=headers
                )
        except httpx.HTTPError as e:
            logger.error("Upstream request failed: %s", e)
            return error_response("Failed to call provider API", 502)

        if not response.is_success:
            message = upstream_error_message(response)
            logger.error("Upstream returned %d: %s", response.status_code, message)
            return error_response(message, response.status_code)

        try:
            return response.json()
        except ValueError:
            logger.error("Upstream returned invalid JSON")
            return error_response("Provider returned an invalid response", 502)

    app.add_api_route("/deepseek", relay, methods=["POST"])
    app.add_api_route("/api/chat", relay, methods=["POST"])

    @app.get("/")
    async def root():
        """Service information."""
        return {
            "service": "QuizBust Proxy",
            "status": "running",
            "version": __version__,
            "endpoints": {
                "health": "/health",
                "relay": "POST /deepseek",
                "relay_alias": "POST /api/chat",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
