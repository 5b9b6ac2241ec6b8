"""Test doubles for the Gemini SDK and for flows."""
import json
import time

PNG_URI = "data:image/png;base64,iVBORw0KGgo="
AUDIO_URI = "data:audio/webm;base64,GkXfow=="


class FakeResponse:
    """Mimics a google.generativeai response; `.text` raises when blocked."""

    def __init__(self, text):
        self._text = text

    @property
    def text(self):
        if isinstance(self._text, Exception):
            raise self._text
        return self._text


class FakeModel:
    """Returns the given replies in order, repeating the last one.

    Dicts are sent back as JSON, exceptions are raised, and for streaming
    calls a reply is a list of chunks.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def generate_content(self, contents, generation_config=None, stream=False, request_options=None):
        self.calls.append({
            "contents": contents,
            "generation_config": generation_config,
            "stream": stream,
            "request_options": request_options,
        })
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, FakeResponse):
            return reply
        if stream:
            return [FakeResponse(chunk) for chunk in reply]
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        return FakeResponse(reply)

    @property
    def last_prompt(self) -> str:
        contents = self.calls[-1]["contents"]
        return contents if isinstance(contents, str) else contents[0]


class StubFlow:
    """Stands in for a flow inside the server actions."""

    def __init__(self, result=None, error=None, delay=0.0, chunks=None):
        self.result = result
        self.error = error
        self.delay = delay
        self.chunks = chunks or []
        self.calls = []

    def run(self, flow_input):
        self.calls.append(flow_input)
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result

    def stream(self, flow_input):
        self.calls.append(flow_input)
        for chunk in self.chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk
