"""Server Actions - The entry points the web client calls.

Every action validates its input, decides which flows to run from what the
user actually sent, runs each flow in a worker thread under the AI timeout,
and returns the `ApiResponse` envelope. Failures never escape an action:
they are logged and mapped to a user-facing message by `format_error`.

Design Decisions:
    1. Fan-out: medicine identification and the authenticity check read the
       same photo, so they run in parallel; guidance waits for both.
    2. One deadline per flow call, not per action.
    3. Timeouts abandon the worker thread; the provider request deadline ends
       the call itself, and is the only deadline on the streamed answer.
"""
import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Iterator, Optional, Type, TypeVar

from pydantic import BaseModel

from config.settings import AI_TIMEOUT_SECONDS, MAX_MEDIA_BYTES
from core.errors import FlowTimeoutError, format_error
from core.media import UploadedMedia, is_valid_data_uri
from flows import (
    CoughAnalysisFlow,
    DebateFlow,
    DetectEmotionFlow,
    DetectFakeOrExpiredMedicineFlow,
    FoodInteractionFlow,
    GeneralHealthQueryFlow,
    IdentifyMedicineFlow,
    MoodAdviceFlow,
    PersonalizedGuidanceFlow,
    TextToSpeechFlow,
    TranscribeAudioFlow,
    TranslateJargonFlow,
    VoiceAssistantFlow,
)
from models import (
    ApiResponse,
    AuthenticityInput,
    CoughAnalysisInput,
    DebateInput,
    DetectEmotionInput,
    FoodInteractionInput,
    GeneralHealthQueryInput,
    HealthAdvisorInput,
    IdentifyMedicineInput,
    MedicineGuideForm,
    MoodAdviceInput,
    PersonalizedGuidanceInput,
    SpeechRequest,
    TranslateJargonInput,
    VoiceAssistantInput,
)
from services.formatting import GREETING, compose_medicine_reply, compose_photo_only_reply

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class FlowRegistry:
    """One instance of every flow, sharing a single Gemini model."""

    def __init__(self, model=None, tts_engine=None):
        self.identify_medicine = IdentifyMedicineFlow(model)
        self.authenticity = DetectFakeOrExpiredMedicineFlow(model)
        self.guidance = PersonalizedGuidanceFlow(model)
        self.general_health = GeneralHealthQueryFlow(model)
        self.food_interaction = FoodInteractionFlow(model)
        self.jargon = TranslateJargonFlow(model)
        self.voice_assistant = VoiceAssistantFlow(model)
        self.transcribe = TranscribeAudioFlow(model)
        self.text_to_speech = TextToSpeechFlow(tts_engine) if tts_engine else TextToSpeechFlow()
        self.cough = CoughAnalysisFlow(model)
        self.debate = DebateFlow(model)
        self.detect_emotion = DetectEmotionFlow(model)
        self.mood_advice = MoodAdviceFlow(model)


_registry: Optional[FlowRegistry] = None


def get_flows() -> FlowRegistry:
    """Return the process-wide flow registry, creating it on first use."""
    global _registry
    if _registry is None:
        _registry = FlowRegistry()
    return _registry


# === Helpers ===

async def with_timeout(awaitable: Awaitable[T], seconds: Optional[float] = None) -> T:
    """Await `awaitable`, raising FlowTimeoutError once the deadline passes."""
    seconds = AI_TIMEOUT_SECONDS if seconds is None else seconds
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        raise FlowTimeoutError(int(seconds * 1000)) from e


async def run_flow(func: Callable[..., T], *args: Any) -> T:
    """Run a synchronous flow call in a worker thread under the AI timeout."""
    return await with_timeout(asyncio.to_thread(func, *args))


def _coerce(model_cls: Type[M], raw: Any) -> M:
    if isinstance(raw, model_cls):
        return raw
    return model_cls.model_validate(raw or {})


def server_action(func: Callable[..., Awaitable[ApiResponse]]) -> Callable[..., Awaitable[ApiResponse]]:
    """Turn any exception raised by an action into a failed envelope."""
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> ApiResponse:
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{func.__name__} error: {e}", exc_info=True)
            return ApiResponse.fail(format_error(e))
    return wrapper


async def _identify_and_check(photo_data_uri: str):
    flows = get_flows()
    return await asyncio.gather(
        run_flow(flows.identify_medicine.run, IdentifyMedicineInput(photo_data_uri=photo_data_uri)),
        run_flow(flows.authenticity.run, AuthenticityInput(photo_data_uri=photo_data_uri)),
    )


# === Medicine check ===

@server_action
async def get_medicine_guide(form: Any) -> ApiResponse:
    """Identify a medicine from a photo/video and/or advise on symptoms.

    Photo + symptoms gives identification, authenticity and personalized
    guidance; photo alone gives identification only; symptoms alone give a
    general health answer as `{text}`.
    """
    form = _coerce(MedicineGuideForm, form)

    if not form.media and not form.symptoms:
        return ApiResponse.fail("Provide symptoms text or upload a medicine image/video.")

    photo_data_uri = None
    if form.media:
        if isinstance(form.media, UploadedMedia):
            if form.media.size > MAX_MEDIA_BYTES:
                return ApiResponse.fail(f"Uploaded file exceeds {MAX_MEDIA_BYTES / 1_048_576:g} MB limit.")
            photo_data_uri = form.media.to_data_uri()
        elif isinstance(form.media, str) and is_valid_data_uri(form.media):
            photo_data_uri = form.media
        else:
            return ApiResponse.fail("Unsupported media format. Please upload an image or short video.")

    flows = get_flows()

    if photo_data_uri and form.symptoms:
        identification, authenticity = await _identify_and_check(photo_data_uri)
        guidance = await run_flow(
            flows.guidance.run,
            PersonalizedGuidanceInput(
                age=form.age if form.age is not None else 0,
                gender=form.gender or "other",
                symptoms=form.symptoms,
                medicine_name=identification.medicine_name or "",
                medicine_usage=identification.usage or "",
            ),
        )
        return ApiResponse.ok(
            {"identification": identification, "authenticity": authenticity, "guidance": guidance}
        )

    if photo_data_uri:
        identification = await run_flow(
            flows.identify_medicine.run, IdentifyMedicineInput(photo_data_uri=photo_data_uri)
        )
        return ApiResponse.ok({"identification": identification, "authenticity": None, "guidance": None})

    text = await run_flow(
        flows.general_health.run,
        GeneralHealthQueryInput(symptoms=form.symptoms, age=form.age, gender=form.gender),
    )
    return ApiResponse.ok({"text": text})


@server_action
async def scan_medicine(photo_data_uri: Any) -> ApiResponse:
    """Camera safety check: identification and the fake/expired check on one frame."""
    if not is_valid_data_uri(photo_data_uri):
        return ApiResponse.fail("Invalid photo data.")
    identification, authenticity = await _identify_and_check(photo_data_uri)
    return ApiResponse.ok({"identification": identification, "authenticity": authenticity})


@server_action
async def get_food_interaction_guide(flow_input: Any) -> ApiResponse:
    flow_input = _coerce(FoodInteractionInput, flow_input)
    return ApiResponse.ok(await run_flow(get_flows().food_interaction.run, flow_input))


# === Language and voice ===

@server_action
async def translate_jargon(flow_input: Any) -> ApiResponse:
    flow_input = _coerce(TranslateJargonInput, flow_input)
    return ApiResponse.ok(await run_flow(get_flows().jargon.run, flow_input))


@server_action
async def get_voice_guidance(flow_input: Any) -> ApiResponse:
    flow_input = _coerce(VoiceAssistantInput, flow_input)
    return ApiResponse.ok(await run_flow(get_flows().voice_assistant.run, flow_input))


@server_action
async def transcribe_symptoms(audio_data_uri: Any) -> ApiResponse:
    if not is_valid_data_uri(audio_data_uri):
        return ApiResponse.fail("Invalid audio data. Provide a base64 data URI.")
    return ApiResponse.ok(await run_flow(get_flows().transcribe.run, audio_data_uri))


@server_action
async def get_audio_for_text(text: str, lang: str = "Urdu") -> ApiResponse:
    request = SpeechRequest(text=text, lang=lang)
    result = await run_flow(get_flows().text_to_speech.run, request)
    return ApiResponse.ok({"audioDataUri": result.media})


@server_action
async def run_health_advisor(raw: Any) -> ApiResponse:
    """The assistant's main entry: voice, text and/or a medicine photo in, `{text}` out."""
    advisor_input = _coerce(HealthAdvisorInput, raw)
    flows = get_flows()

    user_query = advisor_input.text_query or ""

    if advisor_input.audio_data_uri:
        if not is_valid_data_uri(advisor_input.audio_data_uri):
            return ApiResponse.fail("Invalid audio data format.")
        try:
            transcript = await run_flow(flows.transcribe.run, advisor_input.audio_data_uri)
        except Exception as e:
            # Fall back to whatever was typed
            logger.error(f"Transcription error: {e}")
            transcript = None
        if transcript is not None and transcript.text.strip():
            user_query = transcript.text.strip()

    if not user_query and not advisor_input.photo_data_uri:
        return ApiResponse.ok({"text": GREETING})

    details = advisor_input.user_details

    if advisor_input.photo_data_uri:
        if not is_valid_data_uri(advisor_input.photo_data_uri):
            return ApiResponse.fail("Invalid photo data.")

        identification, authenticity = await _identify_and_check(advisor_input.photo_data_uri)

        if not user_query:
            return ApiResponse.ok({"text": compose_photo_only_reply(identification)})

        guidance = await run_flow(
            flows.guidance.run,
            PersonalizedGuidanceInput(
                age=details.age if details and details.age is not None else 30,
                gender=details.gender if details and details.gender else "other",
                symptoms=user_query,
                medicine_name=identification.medicine_name or "",
                medicine_usage=identification.usage or "",
            ),
        )
        return ApiResponse.ok({"text": compose_medicine_reply(identification, authenticity, guidance)})

    text = await run_flow(
        flows.general_health.run,
        GeneralHealthQueryInput(
            symptoms=user_query,
            age=details.age if details else None,
            gender=details.gender if details else None,
            user_lang=advisor_input.user_lang,
        ),
    )
    return ApiResponse.ok({"text": text})


def stream_health_query(raw: Any) -> Iterator[str]:
    """Stream a general health answer as plain text.

    Input is validated before the first chunk; errors after that are
    written into the stream as the user-facing message.
    """
    flow_input = _coerce(GeneralHealthQueryInput, raw)
    return _guarded_stream(get_flows().general_health.stream(flow_input))


def _guarded_stream(chunks: Iterator[str]) -> Iterator[str]:
    try:
        yield from chunks
    except Exception as e:
        logger.error(f"stream_health_query error: {e}", exc_info=True)
        yield f"\n\n{format_error(e)}"


# === Cough, debate, mood ===

@server_action
async def analyze_cough(audio_data_uri: Any) -> ApiResponse:
    if not is_valid_data_uri(audio_data_uri):
        return ApiResponse.fail("Invalid audio data for cough analysis.")
    result = await run_flow(get_flows().cough.run, CoughAnalysisInput(cough_audio=audio_data_uri))
    return ApiResponse.ok(result)


@server_action
async def run_debate(flow_input: Any) -> ApiResponse:
    flow_input = _coerce(DebateInput, flow_input)
    return ApiResponse.ok(await run_flow(get_flows().debate.run, flow_input))


@server_action
async def get_emotion_from_media(flow_input: Any) -> ApiResponse:
    flow_input = _coerce(DetectEmotionInput, flow_input)
    return ApiResponse.ok(await run_flow(get_flows().detect_emotion.run, flow_input))


@server_action
async def get_advice_for_mood(flow_input: Any) -> ApiResponse:
    flow_input = _coerce(MoodAdviceInput, flow_input)
    return ApiResponse.ok(await run_flow(get_flows().mood_advice.run, flow_input))
