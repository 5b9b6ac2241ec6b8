"""Nuskha-e-Sehat Flow Module.

One class per named AI flow. Each flow owns a prompt, calls Gemini and
validates the answer against its pydantic schema.

Flows:
    IdentifyMedicineFlow: Medicine recognition from a photo or video.
    DetectFakeOrExpiredMedicineFlow: Packaging authenticity and expiry check.
    PersonalizedGuidanceFlow: Suitability of a medicine for the user.
    GeneralHealthQueryFlow: Freeform symptom advice (streamable).
    FoodInteractionFlow: Desi food interactions for a medicine.
    TranslateJargonFlow: Medical text in simple regional language.
    VoiceAssistantFlow: Spoken symptoms to guidance.
    TranscribeAudioFlow: Speech to text.
    TextToSpeechFlow: Text to an MP3 data URI (gTTS).
    CoughAnalysisFlow: Acoustic cough categorisation.
    DebateFlow: Doctor vs. herbalist with an arbiter.
    DetectEmotionFlow, MoodAdviceFlow: Mood check-in.
"""
from flows.identify_medicine import IdentifyMedicineFlow
from flows.authenticity import DetectFakeOrExpiredMedicineFlow
from flows.personalized_guidance import PersonalizedGuidanceFlow
from flows.general_health import GeneralHealthQueryFlow
from flows.food_interaction import FoodInteractionFlow
from flows.jargon import TranslateJargonFlow
from flows.voice_assistant import VoiceAssistantFlow
from flows.transcribe import TranscribeAudioFlow
from flows.text_to_speech import TextToSpeechFlow
from flows.cough_analysis import CoughAnalysisFlow
from flows.debate import DebateFlow
from flows.emotion import DetectEmotionFlow, MoodAdviceFlow

__all__ = [
    "IdentifyMedicineFlow",
    "DetectFakeOrExpiredMedicineFlow",
    "PersonalizedGuidanceFlow",
    "GeneralHealthQueryFlow",
    "FoodInteractionFlow",
    "TranslateJargonFlow",
    "VoiceAssistantFlow",
    "TranscribeAudioFlow",
    "TextToSpeechFlow",
    "CoughAnalysisFlow",
    "DebateFlow",
    "DetectEmotionFlow",
    "MoodAdviceFlow",
]
