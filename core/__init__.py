"""Nuskha-e-Sehat Core Module.

Cross-cutting helpers shared by flows and server actions.

Modules:
    errors: Flow/action exception types and user-facing error formatting.
    media: Data URI validation, encoding and decoding.
    observability: Logging setup, flow tracing and metrics.
"""
from core.errors import (
    FlowError,
    AIUnavailableError,
    FlowTimeoutError,
    FlowOutputError,
    InvalidInputError,
    format_error,
)
from core.media import MediaPart, UploadedMedia, is_valid_data_uri, parse_data_uri, to_data_uri

__all__ = [
    "FlowError",
    "AIUnavailableError",
    "FlowTimeoutError",
    "FlowOutputError",
    "InvalidInputError",
    "format_error",
    "MediaPart",
    "UploadedMedia",
    "is_valid_data_uri",
    "parse_data_uri",
    "to_data_uri",
]
