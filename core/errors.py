"""Error types raised by flows and server actions, and their user-facing text."""
import asyncio
import logging

from pydantic import ValidationError

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "The AI service is temporarily unavailable. Please try again in a moment."
GENERIC_MESSAGE = "An unexpected error occurred."

# Substrings the provider SDK puts in transient failure messages
TRANSIENT_MARKERS = ("ECONNRESET", "timed out", "503", "overloaded", "Service Unavailable")


class FlowError(Exception):
    """Base error for anything that goes wrong inside an AI flow."""


class AIUnavailableError(FlowError):
    """The model is not configured, or the provider reported overload."""


class FlowTimeoutError(FlowError):
    """A flow did not finish before its deadline."""

    def __init__(self, timeout_ms: int):
        super().__init__(f"Request timed out after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class FlowOutputError(FlowError):
    """The model answered, but not in the shape the flow expects."""


class InvalidInputError(Exception):
    """A server action received input it cannot work with."""


def is_transient(exc: BaseException) -> bool:
    """True for provider overload, connection resets and timeouts."""
    if isinstance(exc, (FlowTimeoutError, asyncio.TimeoutError, ConnectionResetError)):
        return True
    if exc.__class__.__name__ in ("ServiceUnavailable", "DeadlineExceeded"):
        return True
    message = str(exc)
    return any(marker in message for marker in TRANSIENT_MARKERS)


def format_error(exc: BaseException) -> str:
    """Map an exception to the message shown to the user."""
    if isinstance(exc, ValidationError):
        problems = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()))
            problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
        return "Invalid input: " + "; ".join(problems)
    if isinstance(exc, AIUnavailableError):
        return str(exc) or UNAVAILABLE_MESSAGE
    if is_transient(exc):
        return UNAVAILABLE_MESSAGE
    return str(exc) or GENERIC_MESSAGE
