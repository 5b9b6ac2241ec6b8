"""Cough analysis schemas. Categories are acoustic, never diagnoses."""
from typing import List, Literal

from pydantic import Field

from models.base import CamelModel

RecommendationLevel = Literal[
    "Self-care suggested",
    "See clinician within 48 hours",
    "Seek immediate care",
]


class CoughAnalysisInput(CamelModel):
    cough_audio: str = Field(
        description="An audio recording of a cough, as a data URI that must include a MIME type and use "
        "Base64 encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'."
    )


class CoughAnalysisOutput(CamelModel):
    sound_type: str = Field(
        description='The classified sound type of the cough (e.g., "Dry-like cough", "Wet-like cough").'
    )
    confidence: float = Field(ge=0, le=1, description="A confidence score for the prediction, from 0.0 to 1.0.")
    recommendation: str = Field(
        description="A clear, actionable next step for the user in the local language, based on the sound type."
    )
    recommendation_level: RecommendationLevel = Field(description="The recommended urgency level.")
    explanation: str = Field(description="A simple, one-sentence explanation of the result in the local language.")
    acoustic_flags: List[str] = Field(
        default_factory=list,
        description="Detected red-flag audio indicators, e.g., ['Possible breathing difficulty detected (urgent)'].",
    )
