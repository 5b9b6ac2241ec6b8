"""Shared plumbing for Gemini-backed flows.

A flow owns one prompt. Structured flows ask Gemini for JSON
(`response_mime_type="application/json"`), describe the expected shape with the
output model's JSON schema, and validate the answer with pydantic before
returning it. Media arrives as a data URI and is sent as inline data.
"""
import json
import logging
from typing import Any, Iterator, List, Optional, Type

from pydantic import BaseModel, ValidationError

from config.llm import get_gemini_model
from config.settings import AI_TIMEOUT_SECONDS
from core.errors import AIUnavailableError, FlowOutputError
from core.media import MediaPart, parse_data_uri

logger = logging.getLogger(__name__)

JSON_CONFIG = {"response_mime_type": "application/json"}

UNREADABLE_MESSAGE = "The AI response could not be read. Please try again."


class GeminiFlow:
    """Base class for a named prompt/schema pair."""

    name = "flow"
    output_model: Optional[Type[BaseModel]] = None

    def __init__(self, model=None):
        self.model = model or get_gemini_model()

    # === Model calls ===

    def _require_model(self):
        if not self.model:
            raise AIUnavailableError(
                "The AI service is not configured. Set GOOGLE_API_KEY and try again."
            )
        return self.model

    def _contents(self, prompt: str, media: Optional[MediaPart] = None) -> List[Any]:
        contents: List[Any] = [prompt]
        if media is not None:
            contents.append(media.as_inline_data())
        return contents

    def _generate_text(self, prompt: str, media: Optional[MediaPart] = None) -> str:
        model = self._require_model()
        response = model.generate_content(self._contents(prompt, media), request_options=_request_options())
        return _response_text(response)

    def _stream_text(self, prompt: str) -> Iterator[str]:
        model = self._require_model()
        for chunk in model.generate_content(prompt, stream=True, request_options=_request_options()):
            text = _response_text(chunk, allow_empty=True)
            if text:
                yield text

    def _generate_structured(
        self,
        prompt: str,
        media: Optional[MediaPart] = None,
        output_model: Optional[Type[BaseModel]] = None,
    ) -> BaseModel:
        output_model = output_model or self.output_model
        model = self._require_model()
        full_prompt = f"{prompt}\n\n{schema_instructions(output_model)}"
        response = model.generate_content(
            self._contents(full_prompt, media),
            generation_config=JSON_CONFIG,
            request_options=_request_options(),
        )
        return parse_structured(_response_text(response), output_model)

    @staticmethod
    def _media(data_uri: str) -> MediaPart:
        return parse_data_uri(data_uri)


def schema_instructions(output_model: Type[BaseModel]) -> str:
    schema = output_model.model_json_schema(by_alias=True)
    return (
        "Respond ONLY with a JSON object matching this JSON schema "
        "(no Markdown, no commentary):\n"
        f"{json.dumps(schema, ensure_ascii=False)}"
    )


def parse_structured(text: str, output_model: Type[BaseModel]) -> BaseModel:
    """Parse model text as JSON and validate it against `output_model`.

    Details go to the log; the raised FlowOutputError carries a message fit
    for the user.
    """
    schema_name = output_model.__name__
    clean_text = (text or "").replace("```json", "").replace("```", "").strip()
    try:
        data = json.loads(clean_text)
    except json.JSONDecodeError:
        # Models sometimes wrap the object in prose
        start, end = clean_text.find("{"), clean_text.rfind("}")
        if start == -1 or end <= start:
            logger.warning(f"{schema_name}: response was not JSON: {clean_text[:200]!r}")
            raise FlowOutputError(UNREADABLE_MESSAGE)
        try:
            data = json.loads(clean_text[start:end + 1])
        except json.JSONDecodeError as e:
            logger.warning(f"{schema_name}: response was not JSON ({e})")
            raise FlowOutputError(UNREADABLE_MESSAGE) from e

    try:
        return output_model.model_validate(data)
    except ValidationError as e:
        logger.warning(f"{schema_name} failed validation: {e}")
        raise FlowOutputError(UNREADABLE_MESSAGE) from e


def _request_options() -> dict:
    # Provider-side deadline, so a hung stream or abandoned worker call ends too
    return {"timeout": AI_TIMEOUT_SECONDS}


def _response_text(response, allow_empty: bool = False) -> str:
    # The SDK raises ValueError from .text when the candidate was blocked
    try:
        text = response.text
    except ValueError as e:
        if allow_empty:
            return ""
        raise FlowOutputError("The AI response was blocked or empty.") from e
    if not text and not allow_empty:
        raise FlowOutputError("The AI response was blocked or empty.")
    return text or ""
