"""Server action tests: branching, defaults, timeouts and error envelopes."""
import asyncio

import pytest

from config.settings import MAX_MEDIA_BYTES
from core.errors import UNAVAILABLE_MESSAGE, FlowTimeoutError
from core.media import UploadedMedia
from flows.cough_analysis import COUGH_CATEGORIES
from services import actions
from services.formatting import ADVISOR_DISCLAIMER, GREETING
from tests.fakes import AUDIO_URI, PNG_URI, StubFlow


def run(coro):
    return asyncio.run(coro).to_wire()


class TestWithTimeout:
    """Deadline helper."""

    def test_timeout_message(self):
        """A missed deadline raises with the milliseconds in the message."""
        async def slow():
            await asyncio.sleep(1)

        with pytest.raises(FlowTimeoutError, match="Request timed out after 50ms"):
            asyncio.run(actions.with_timeout(slow(), 0.05))

    def test_result_passes_through(self):
        """A fast awaitable's result is returned unchanged."""
        async def quick():
            return 42

        assert asyncio.run(actions.with_timeout(quick(), 1)) == 42

    def test_slow_flow_becomes_friendly_error(self, stub_flows, monkeypatch):
        """A timed-out flow reaches the user as the unavailable message."""
        monkeypatch.setattr(actions, "AI_TIMEOUT_SECONDS", 0.05)
        stub_flows.jargon = StubFlow(delay=0.3)
        result = run(actions.translate_jargon({"medicalText": "Hypertension", "targetLanguage": "Urdu"}))
        assert result == {"success": False, "error": UNAVAILABLE_MESSAGE}


class TestMedicineGuide:
    """Dashboard medicine check."""

    def test_needs_media_or_symptoms(self, stub_flows):
        """Blank symptoms and no media is refused."""
        result = run(actions.get_medicine_guide({"symptoms": "   "}))
        assert result == {"success": False, "error": "Provide symptoms text or upload a medicine image/video."}

    def test_rejects_unsupported_media(self, stub_flows):
        """A URL is not accepted as media."""
        result = run(actions.get_medicine_guide({"media": "http://example.com/pill.png"}))
        assert result["error"] == "Unsupported media format. Please upload an image or short video."
        assert stub_flows.identify_medicine.calls == []

    def test_rejects_oversized_upload(self, stub_flows):
        """Uploads over the media limit are refused."""
        upload = UploadedMedia(content_type="image/jpeg", data=b"\0" * (MAX_MEDIA_BYTES + 1))
        result = run(actions.get_medicine_guide({"media": upload}))
        assert result["error"] == "Uploaded file exceeds 6 MB limit."

    def test_photo_and_symptoms_runs_full_check(self, stub_flows):
        """Photo plus symptoms gives identification, authenticity and guidance."""
        upload = UploadedMedia(content_type="image/png", data=b"\x89PNG", filename="pill.png")
        result = run(actions.get_medicine_guide({"media": upload, "symptoms": " sar dard "}))

        assert result["success"] is True
        data = result["data"]
        assert data["identification"]["medicineName"] == "Panadol"
        assert data["authenticity"] == {"isFakeOrExpired": False, "reason": "Packaging looks genuine."}
        assert data["guidance"]["sideEffects"] == "Nausea"

        sent = stub_flows.identify_medicine.calls[0].photo_data_uri
        assert sent.startswith("data:image/png;base64,")
        assert stub_flows.authenticity.calls[0].photo_data_uri == sent

        guidance_input = stub_flows.guidance.calls[0]
        assert guidance_input.age == 0
        assert guidance_input.gender == "other"
        assert guidance_input.symptoms == "sar dard"
        assert guidance_input.medicine_name == "Panadol"
        assert guidance_input.medicine_usage == "Pain relief"

    def test_form_age_and_gender_are_used(self, stub_flows):
        """Form age and gender reach the guidance flow."""
        run(actions.get_medicine_guide({"media": PNG_URI, "symptoms": "bukhar", "age": "42", "gender": "female"}))
        assert stub_flows.guidance.calls[0].age == 42
        assert stub_flows.guidance.calls[0].gender == "female"

    def test_photo_only_identifies(self, stub_flows):
        """A photo without symptoms only identifies the medicine."""
        result = run(actions.get_medicine_guide({"media": PNG_URI}))
        assert result["data"]["identification"]["usage"] == "Pain relief"
        assert result["data"]["authenticity"] is None
        assert result["data"]["guidance"] is None
        assert stub_flows.authenticity.calls == []

    def test_symptoms_only_asks_general_query(self, stub_flows):
        """Symptoms alone get a general health answer."""
        result = run(actions.get_medicine_guide({"symptoms": "nazla", "age": "", "gender": "male"}))
        assert result["data"] == {"text": stub_flows.general_health.result}
        query = stub_flows.general_health.calls[0]
        assert query.symptoms == "nazla"
        assert query.age is None
        assert query.gender == "male"

    def test_invalid_gender_is_input_error(self, stub_flows):
        """An unknown gender is reported as invalid input."""
        result = run(actions.get_medicine_guide({"symptoms": "nazla", "gender": "unknown"}))
        assert result["success"] is False
        assert result["error"].startswith("Invalid input: gender")

    def test_parallel_failure_fails_action(self, stub_flows):
        """If either parallel check fails, guidance is not attempted."""
        stub_flows.authenticity = StubFlow(error=ConnectionResetError("read ECONNRESET"))
        result = run(actions.get_medicine_guide({"media": PNG_URI, "symptoms": "dard"}))
        assert result == {"success": False, "error": UNAVAILABLE_MESSAGE}
        assert stub_flows.guidance.calls == []


class TestMedicineScan:
    """Camera safety check."""

    def test_scan_returns_both_checks(self, stub_flows):
        """One frame gives identification and authenticity together."""
        result = run(actions.scan_medicine(PNG_URI))
        assert result["success"] is True
        assert set(result["data"]) == {"identification", "authenticity"}
        assert result["data"]["identification"]["medicineName"] == "Panadol"
        assert result["data"]["authenticity"] == {"isFakeOrExpired": False, "reason": "Packaging looks genuine."}
        assert stub_flows.identify_medicine.calls[0].photo_data_uri == PNG_URI
        assert stub_flows.authenticity.calls[0].photo_data_uri == PNG_URI

    def test_scan_rejects_bad_photo(self, stub_flows):
        """A frame that is not a data URI is refused before any flow runs."""
        assert run(actions.scan_medicine("frame.jpg")) == {"success": False, "error": "Invalid photo data."}
        assert stub_flows.identify_medicine.calls == []

    def test_scan_failure_is_wrapped(self, stub_flows):
        """A failed identification comes back as an error envelope."""
        stub_flows.identify_medicine = StubFlow(error=RuntimeError("503 Service Unavailable"))
        assert run(actions.scan_medicine(PNG_URI)) == {"success": False, "error": UNAVAILABLE_MESSAGE}


class TestHealthAdvisor:
    """Voice/text/photo assistant."""

    def test_greets_when_empty(self, stub_flows):
        """Nothing to answer means the greeting."""
        assert run(actions.run_health_advisor({"textQuery": "  "})) == {"success": True, "data": {"text": GREETING}}

    def test_invalid_audio(self, stub_flows):
        """Audio that is not a data URI is refused."""
        result = run(actions.run_health_advisor({"audioDataUri": "voice.webm"}))
        assert result == {"success": False, "error": "Invalid audio data format."}

    def test_transcript_replaces_typed_query(self, stub_flows):
        """A non-empty transcript wins over typed text."""
        run(actions.run_health_advisor({"audioDataUri": AUDIO_URI, "textQuery": "typed", "userLang": "ur"}))
        query = stub_flows.general_health.calls[0]
        assert query.symptoms == "mujhe sar dard hai"
        assert query.user_lang == "ur"

    def test_transcription_failure_is_ignored(self, stub_flows):
        """A failed transcription falls back to the typed text."""
        stub_flows.transcribe = StubFlow(error=RuntimeError("speech model down"))
        result = run(actions.run_health_advisor({"audioDataUri": AUDIO_URI, "textQuery": "pait dard"}))
        assert result["success"] is True
        assert stub_flows.general_health.calls[0].symptoms == "pait dard"

    def test_failed_transcription_without_text_greets(self, stub_flows):
        """No transcript and no text means the greeting."""
        stub_flows.transcribe = StubFlow(error=RuntimeError("speech model down"))
        result = run(actions.run_health_advisor({"audioDataUri": AUDIO_URI}))
        assert result["data"]["text"] == GREETING

    def test_invalid_photo(self, stub_flows):
        """A photo that is not a data URI is refused."""
        result = run(actions.run_health_advisor({"photoDataUri": "photo.jpg"}))
        assert result == {"success": False, "error": "Invalid photo data."}

    def test_photo_only_asks_for_details(self, stub_flows):
        """A photo alone names the medicine and asks for details."""
        result = run(actions.run_health_advisor({"photoDataUri": PNG_URI}))
        assert result["data"]["text"] == (
            "I found Panadol. Tell me your age, gender, and symptoms for personalized advice."
        )
        assert stub_flows.guidance.calls == []

    def test_photo_and_query_composes_reply(self, stub_flows):
        """Photo plus query composes the disclaimer, checks and guidance."""
        result = run(actions.run_health_advisor({"photoDataUri": PNG_URI, "textQuery": "bukhar"}))
        assert result["data"]["text"] == "\n\n".join([
            ADVISOR_DISCLAIMER,
            "Identified medicine: Panadol.",
            "Purpose: Pain relief.",
            "Authenticity: Appears authentic/not expired.",
            "Guidance: Suitable for adults.",
        ])
        guidance_input = stub_flows.guidance.calls[0]
        assert guidance_input.age == 30
        assert guidance_input.gender == "other"

    def test_user_details_reach_guidance(self, stub_flows):
        """Provided age and gender override the defaults."""
        run(actions.run_health_advisor({
            "photoDataUri": PNG_URI,
            "textQuery": "bukhar",
            "userDetails": {"age": "65", "gender": "male"},
        }))
        assert stub_flows.guidance.calls[0].age == 65
        assert stub_flows.guidance.calls[0].gender == "male"

    def test_general_query_errors_are_wrapped(self, stub_flows):
        """General query failures come back in the envelope."""
        stub_flows.general_health = StubFlow(error=RuntimeError("quota exceeded"))
        result = run(actions.run_health_advisor({"textQuery": "khansi"}))
        assert result == {"success": False, "error": "quota exceeded"}


class TestSimpleActions:
    """Validate, run, wrap."""

    def test_transcribe_validates_uri(self, stub_flows):
        """Transcription needs a data URI."""
        result = run(actions.transcribe_symptoms("hello"))
        assert result == {"success": False, "error": "Invalid audio data. Provide a base64 data URI."}
        assert run(actions.transcribe_symptoms(AUDIO_URI))["data"] == {"text": "mujhe sar dard hai"}

    def test_audio_for_text(self, stub_flows):
        """Speech is returned under audioDataUri with the requested language."""
        result = run(actions.get_audio_for_text("Aram karein", "Punjabi"))
        assert result["data"] == {"audioDataUri": "data:audio/mpeg;base64,SUQz"}
        assert stub_flows.text_to_speech.calls[0].lang == "Punjabi"

    def test_cough_validates_uri(self, stub_flows):
        """Cough analysis needs a data URI."""
        result = run(actions.analyze_cough(None))
        assert result == {"success": False, "error": "Invalid audio data for cough analysis."}

    def test_cough_fallback_result(self, stub_flows):
        """The offline cough answer has the full wire shape."""
        data = run(actions.analyze_cough(AUDIO_URI))["data"]
        assert data["soundType"] in [c["soundType"] for c in COUGH_CATEGORIES]
        assert set(data) == {
            "soundType", "confidence", "recommendation", "recommendationLevel", "explanation", "acousticFlags",
        }

    def test_jargon_invalid_language(self, stub_flows):
        """Unsupported jargon languages are invalid input."""
        result = run(actions.translate_jargon({"medicalText": "Tachycardia", "targetLanguage": "French"}))
        assert result["success"] is False
        assert result["error"].startswith("Invalid input: targetLanguage")

    def test_food_and_voice(self, stub_flows):
        """Food and voice guides pass the flow result through."""
        food = run(actions.get_food_interaction_guide({"medicineName": "Augmentin"}))
        assert food["data"]["timingSuggestion"] == "Khane ke baad lein."
        voice = run(actions.get_voice_guidance({
            "audioDataUri": AUDIO_URI, "medicineDetails": "Panadol", "userDetails": "30, male",
        }))
        assert voice["data"] == {"guidance": "Aram karein."}

    def test_debate_defaults(self, stub_flows):
        """Debate input defaults to Urdu and echoes back."""
        data = run(actions.run_debate({"symptom_text": "khansi"}))["data"]
        assert data["userInput"]["user_lang"] == "ur"
        assert data["arbiterVerdict"]["final_urgency"] == "watch"

    def test_emotion_and_mood(self, stub_flows):
        """A detected emotion can be fed straight into mood advice."""
        emotion = run(actions.get_emotion_from_media({"mediaUri": PNG_URI}))["data"]["emotion"]
        advice = run(actions.get_advice_for_mood({"emotion": emotion}))["data"]
        assert stub_flows.mood_advice.calls[0].user_lang == "ur"
        assert len(advice["tips"]) == 2


class TestStreaming:
    """Plain-text streamed general query."""

    def test_chunks_pass_through(self, stub_flows):
        """Chunks are forwarded as they arrive."""
        stub_flows.general_health = StubFlow(chunks=["Aram ", "karein."])
        assert "".join(actions.stream_health_query({"symptoms": "thakan"})) == "Aram karein."

    def test_error_is_written_into_stream(self, stub_flows):
        """A mid-stream failure ends the text with the user-facing message."""
        stub_flows.general_health = StubFlow(chunks=["Aram ", TimeoutError("Deadline timed out")])
        text = "".join(actions.stream_health_query({"symptoms": "thakan"}))
        assert text == f"Aram \n\n{UNAVAILABLE_MESSAGE}"
