"""Quiz Requester - Asks the model for one question about a subject."""

import logging
from typing import Any, Protocol

import httpx
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI

from quizbust.config.settings import Settings, get_settings
from quizbust.errors import ConfigurationError, ParseError, QuizValidationError, TransportError

logger = logging.getLogger(__name__)

DELIMITED_FORMAT_INSTRUCTIONS = (
    "Answer in the format "
    "<category>;<difficulty out of 5>;<question>;<choice 1>;<choice 2>;"
    "<choice 3>;<choice 4>;<correct choice number>. "
    "Reply with that single line only and do not use semicolons anywhere else."
)

JSON_FORMAT_INSTRUCTIONS = (
    "Reply with a single JSON object and nothing else, using exactly these keys: "
    '"category" (string), "difficulty" (integer 1-5), "question" (string), '
    '"choices" (array of exactly 4 strings), '
    '"correct_choice" (integer 1-4, the number of the correct choice).'
)


class QuizRequester(Protocol):
    """Anything that can fetch a raw model reply for a subject."""

    def request(self, subject: str) -> str: ...


def validate_subject(subject: str) -> str:
    """
    Check that a subject is usable and return it stripped.

    Raises:
        QuizValidationError: If the subject is empty or whitespace
    """
    cleaned = (subject or "").strip()
    if not cleaned:
        raise QuizValidationError("Please enter a subject")
    return cleaned


def build_prompt(subject: str, reply_format: str = "delimited") -> str:
    """
    Build the instruction prompt for one question.

    Args:
        subject: Subject the question should be about
        reply_format: "delimited" or "json"

    Returns:
        Prompt text for a single user message
    """
    instructions = (
        JSON_FORMAT_INSTRUCTIONS if reply_format == "json" else DELIMITED_FORMAT_INSTRUCTIONS
    )
    return (
        f"Generate a unique and varied multiple choice question about {subject}. "
        "Make it a random difficulty out of 5 (try to avoid 4). "
        "Focus on different aspects, subtopics, or angles each time. "
        "Avoid common or basic questions. "
        "Be creative and diverse in your question types "
        "(factual, analytical, application-based, etc.). "
        "Provide a 1-3 word category. "
        f"{instructions}"
    )


def build_messages(subject: str, reply_format: str = "delimited") -> list[dict[str, str]]:
    """Build the chat messages payload sent to the proxy."""
    return [{"role": "user", "content": build_prompt(subject, reply_format)}]


def extract_completion_text(payload: Any) -> str:
    """
    Pull the top completion text out of a chat completions payload.

    Raises:
        ParseError: If the payload has no completion text
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ParseError("No reply found in the completion payload") from e
    if not isinstance(content, str) or not content.strip():
        raise ParseError("No reply found in the completion payload")
    return content


class ProxyRequester:
    """Requests questions through the QuizBust proxy, which holds the API key."""

    def __init__(
        self,
        proxy_url: str,
        reply_format: str = "delimited",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.proxy_url = proxy_url
        self.reply_format = reply_format
        self.timeout = timeout
        self.transport = transport

    def request(self, subject: str) -> str:
        """
        Send one request for a question about the subject.

        Args:
            subject: Subject the question should be about

        Returns:
            Raw reply text from the model

        Raises:
            QuizValidationError: If the subject is empty
            TransportError: On network failure or a non-success status
            ParseError: If the proxy answered without completion text
        """
        subject = validate_subject(subject)
        body = {"messages": build_messages(subject, self.reply_format)}

        logger.debug("Requesting question about %r via %s", subject, self.proxy_url)
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.proxy_url, json=body)
        except httpx.HTTPError as e:
            logger.warning("Proxy request failed: %s", e)
            raise TransportError(f"Network error: {e}") from e

        if not response.is_success:
            raise TransportError(
                describe_error_response(response),
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError("Proxy returned invalid JSON") from e

        return extract_completion_text(payload)


class ChatModelRequester:
    """Requests questions directly from a LangChain chat model."""

    def __init__(self, llm: BaseChatModel, reply_format: str = "delimited"):
        self.llm = llm
        self.reply_format = reply_format

    def request(self, subject: str) -> str:
        """
        Send one request for a question about the subject.

        Args:
            subject: Subject the question should be about

        Returns:
            Raw reply text from the model

        Raises:
            QuizValidationError: If the subject is empty
            TransportError: If the model call fails
            ParseError: If the model returned no text
        """
        subject = validate_subject(subject)
        messages = [HumanMessage(content=build_prompt(subject, self.reply_format))]

        logger.debug("Requesting question about %r from chat model", subject)
        try:
            reply = self.llm.invoke(messages)
        except Exception as e:
            # Provider SDKs raise their own exception types; treat all as transport
            logger.warning("Chat model request failed: %s", e)
            raise TransportError(f"Failed to call the model: {e}") from e

        content = reply.content
        if not isinstance(content, str) or not content.strip():
            raise ParseError("No reply found")
        return content


def describe_error_response(response: httpx.Response) -> str:
    """Build a player-facing message from a failed HTTP response."""
    message = None
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
        elif isinstance(error, str):
            message = error

    if response.status_code == 401:
        return "Invalid API key - please check the provider API key"
    if response.status_code == 429:
        return "Rate limit exceeded - please wait and try again"
    return message or f"Server error: {response.status_code}"


def create_chat_model(settings: Settings) -> BaseChatModel:
    """
    Create the chat model for direct requests.

    Raises:
        ConfigurationError: If no API key is configured
    """
    if not settings.api_key:
        raise ConfigurationError(
            "DEEPSEEK_API_KEY is not set. Set it, or set QUIZBUST_PROXY_URL to play through a proxy."
        )

    return ChatOpenAI(
        model=settings.model_name,
        api_key=settings.api_key,
        base_url=settings.provider_base_url,
        temperature=settings.default_temperature,
        max_tokens=settings.max_tokens,
        timeout=settings.request_timeout,
        max_retries=0,
    )


def get_requester(settings: Settings | None = None) -> QuizRequester:
    """
    Pick the requester for the current configuration.

    A configured proxy URL wins; otherwise the model is called directly.

    Raises:
        ConfigurationError: If direct mode is selected without an API key
    """
    settings = settings or get_settings()

    if settings.proxy_url:
        return ProxyRequester(
            proxy_url=settings.proxy_url,
            reply_format=settings.reply_format,
            timeout=settings.request_timeout,
        )
    return ChatModelRequester(create_chat_model(settings), reply_format=settings.reply_format)
