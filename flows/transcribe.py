"""TranscribeAudioFlow - Speech to text for the local languages we support."""
from core.observability import trace_flow
from flows.base import GeminiFlow
from models.assistant import TranscriptionOutput

PROMPT = (
    "Transcribe the following audio. The user might speak in English, Urdu, Pashto, Sindhi, or Punjabi. "
    "Return only the words spoken, with no commentary."
)


class TranscribeAudioFlow(GeminiFlow):
    name = "transcribeAudio"

    @trace_flow
    def run(self, audio_data_uri: str) -> TranscriptionOutput:
        text = self._generate_text(PROMPT, self._media(audio_data_uri))
        return TranscriptionOutput(text=text.strip())
