"""Shared fixtures: fake Gemini models and stubbed flows. No test calls the real API."""
import random
from types import SimpleNamespace

import pytest

from core.observability import metrics
from flows import CoughAnalysisFlow, DebateFlow, DetectEmotionFlow
from models import (
    AuthenticityOutput,
    FoodInteractionOutput,
    IdentifyMedicineOutput,
    MoodAdviceOutput,
    PersonalizedGuidanceOutput,
    SpeechOutput,
    TranscriptionOutput,
    TranslateJargonOutput,
    VoiceAssistantOutput,
)
from services import actions
from tests.fakes import StubFlow


@pytest.fixture(autouse=True)
def no_api_key(monkeypatch):
    """Flows built without an explicit model get None, never a live client."""
    monkeypatch.setattr("config.llm.GOOGLE_API_KEY", None)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    metrics.reset()
    monkeypatch.setattr(actions, "_registry", None)
    yield
    metrics.reset()


@pytest.fixture
def stub_flows(monkeypatch):
    """Server actions wired to stubs; cough, debate and emotion run their real offline fallbacks."""
    flows = SimpleNamespace(
        identify_medicine=StubFlow(IdentifyMedicineOutput(medicine_name="Panadol", usage="Pain relief")),
        authenticity=StubFlow(AuthenticityOutput(is_fake_or_expired=False, reason="Packaging looks genuine.")),
        guidance=StubFlow(PersonalizedGuidanceOutput(
            suitability="Suitable for adults.",
            side_effects="Nausea",
            warnings="Do not exceed 4g a day.",
        )),
        general_health=StubFlow("⚠️ I am not a real doctor. This is for advice only.\n\nPani zyada piyen."),
        food_interaction=StubFlow(FoodInteractionOutput.model_validate({
            "medicineName": "Augmentin",
            "purpose": "Infection ka ilaj",
            "interactions": {"avoid": [], "warning": [], "safe": []},
            "timingSuggestion": "Khane ke baad lein.",
        })),
        jargon=StubFlow(TranslateJargonOutput(simple_explanation="Blood pressure zyada hai.")),
        voice_assistant=StubFlow(VoiceAssistantOutput(guidance="Aram karein.")),
        transcribe=StubFlow(TranscriptionOutput(text="mujhe sar dard hai")),
        text_to_speech=StubFlow(SpeechOutput(media="data:audio/mpeg;base64,SUQz")),
        cough=CoughAnalysisFlow(rng=random.Random(7)),
        debate=DebateFlow(),
        detect_emotion=DetectEmotionFlow(rng=random.Random(7)),
        mood_advice=StubFlow(MoodAdviceOutput(
            greeting="Aap kuch udaas lag rahe ho.",
            tips=["Thori walk karein", "Kisi dost se baat karein"],
            affirmation="Aaj ka din behtar hoga.",
        )),
    )
    monkeypatch.setattr(actions, "get_flows", lambda: flows)
    return flows
