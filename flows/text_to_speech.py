"""TextToSpeechFlow - Reads assistant replies aloud with gTTS.

gTTS has no voices for several regional languages, so those are read with
the Urdu voice, which their speakers generally understand.
"""
import io
import logging
from typing import Dict

from gtts import gTTS

from core.media import to_data_uri
from core.observability import trace_flow
from models.assistant import SpeechOutput, SpeechRequest

logger = logging.getLogger(__name__)

FALLBACK_TTS_LANG = "ur"

TTS_LANGS: Dict[str, str] = {
    "urdu": "ur",
    "ur": "ur",
    "punjabi": "pa",
    "pa": "pa",
    "english": "en",
    "en": "en",
    # No gTTS voice; read with Urdu
    "sindhi": FALLBACK_TTS_LANG,
    "pashto": FALLBACK_TTS_LANG,
    "balochi": FALLBACK_TTS_LANG,
    "siraiki": FALLBACK_TTS_LANG,
}


def tts_lang_for(lang: str) -> str:
    return TTS_LANGS.get((lang or "").strip().lower(), FALLBACK_TTS_LANG)


class TextToSpeechFlow:
    name = "textToSpeech"

    def __init__(self, engine=gTTS):
        self.engine = engine

    @trace_flow
    def run(self, request: SpeechRequest) -> SpeechOutput:
        lang = tts_lang_for(request.lang)
        if (request.lang or "").strip().lower() not in TTS_LANGS:
            logger.info(f"No voice for '{request.lang}', using '{FALLBACK_TTS_LANG}'")
        buffer = io.BytesIO()
        self.engine(text=request.text, lang=lang).write_to_fp(buffer)
        return SpeechOutput(media=to_data_uri(buffer.getvalue(), "audio/mpeg"))
