"""Nuskha-e-Sehat Data Models.

Pydantic schemas for every flow's input and output, plus the server-action
response envelope. JSON keys match the web client exactly.

Models:
    IdentifyMedicineOutput, AuthenticityOutput, PersonalizedGuidanceOutput: Medicine check.
    FoodInteractionOutput: Medicine/food interaction guide.
    DebateResult: Doctor vs. herbalist debate with arbiter verdict.
    DetectEmotionOutput, MoodAdviceOutput: Mood check.
    CoughAnalysisOutput: Acoustic cough categorisation.
    HealthAdvisorInput, MedicineGuideForm, PhotoRequest: Assistant, medicine guide and scan requests.
    ApiResponse: {success, data} / {success, error} envelope.
"""
from models.assistant import (
    AudioRequest,
    HealthAdvisorInput,
    MedicineGuideForm,
    PhotoRequest,
    SpeechOutput,
    SpeechRequest,
    TranscriptionOutput,
    TranslateJargonInput,
    TranslateJargonOutput,
    UserDetails,
    VoiceAssistantInput,
    VoiceAssistantOutput,
)
from models.cough import CoughAnalysisInput, CoughAnalysisOutput
from models.debate import AgentTurn, ArbiterVerdict, DebateInput, DebateResult
from models.emotion import DetectEmotionInput, DetectEmotionOutput, MoodAdviceInput, MoodAdviceOutput
from models.food_interaction import FoodInteractionInput, FoodInteractionOutput, FoodItem
from models.medicine import (
    AuthenticityInput,
    AuthenticityOutput,
    GeneralHealthQueryInput,
    IdentifyMedicineInput,
    IdentifyMedicineOutput,
    PersonalizedGuidanceInput,
    PersonalizedGuidanceOutput,
)
from models.responses import ApiResponse

__all__ = [
    "ApiResponse",
    "AudioRequest",
    "AgentTurn",
    "ArbiterVerdict",
    "AuthenticityInput",
    "AuthenticityOutput",
    "CoughAnalysisInput",
    "CoughAnalysisOutput",
    "DebateInput",
    "DebateResult",
    "DetectEmotionInput",
    "DetectEmotionOutput",
    "FoodInteractionInput",
    "FoodInteractionOutput",
    "FoodItem",
    "GeneralHealthQueryInput",
    "HealthAdvisorInput",
    "IdentifyMedicineInput",
    "IdentifyMedicineOutput",
    "MedicineGuideForm",
    "MoodAdviceInput",
    "MoodAdviceOutput",
    "PersonalizedGuidanceInput",
    "PersonalizedGuidanceOutput",
    "PhotoRequest",
    "SpeechOutput",
    "SpeechRequest",
    "TranscriptionOutput",
    "TranslateJargonInput",
    "TranslateJargonOutput",
    "UserDetails",
    "VoiceAssistantInput",
    "VoiceAssistantOutput",
]
