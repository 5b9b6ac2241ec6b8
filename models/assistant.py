"""Schemas for the voice assistant, jargon buster, transcription and speech."""
from typing import Any, Literal, Optional

from pydantic import Field, field_validator

from models.base import CamelModel, WireModel
from models.medicine import Gender

JargonLanguage = Literal["Urdu", "Punjabi", "Sindhi", "Pashto", "Balochi"]
AssistantLanguage = Literal["Urdu", "Punjabi", "Pashto", "Sindhi", "Balochi", "Siraiki"]


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TranslateJargonInput(CamelModel):
    medical_text: str = Field(min_length=1, description="The medical jargon text to be translated into simpler terms.")
    target_language: JargonLanguage = Field(description="The target local language for the translation.")


class TranslateJargonOutput(CamelModel):
    simple_explanation: str = Field(
        description="The simplified explanation of the medical jargon in the target language."
    )


class VoiceAssistantInput(CamelModel):
    audio_data_uri: str = Field(
        description="The audio data URI of the user's voice input in a local language (Urdu, Balochi, Pashto, "
        "Sindhi, Siraiki), that must include a MIME type and use Base64 encoding."
    )
    medicine_details: str = Field(description="The extracted details of the medicine.")
    user_details: str = Field(description="The user details like age, gender, etc.")


class VoiceAssistantOutput(CamelModel):
    guidance: str = Field(description="The personalized health guidance and warnings.")


class TranscriptionOutput(WireModel):
    text: str = Field(description="The transcribed text from the audio.")


class AudioRequest(CamelModel):
    audio_data_uri: str


class PhotoRequest(CamelModel):
    photo_data_uri: str


class SpeechRequest(WireModel):
    text: str = Field(min_length=1)
    lang: str = "Urdu"


class SpeechOutput(WireModel):
    media: str = Field(description="Synthesized speech as an audio data URI.")


class UserDetails(CamelModel):
    age: Optional[int] = None
    gender: Optional[Gender] = None

    @field_validator("age", "gender", mode="before")
    @classmethod
    def blank_fields(cls, value):
        return blank_to_none(value)


class HealthAdvisorInput(CamelModel):
    audio_data_uri: Optional[str] = Field(default=None, description="Base64 data URI for audio.")
    text_query: Optional[str] = None
    photo_data_uri: Optional[str] = Field(default=None, description="Base64 data URI for an image.")
    user_details: Optional[UserDetails] = None
    user_lang: Optional[str] = None

    @field_validator("text_query", mode="before")
    @classmethod
    def strip_query(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("audio_data_uri", "photo_data_uri", "user_lang", mode="before")
    @classmethod
    def blank_fields(cls, value):
        return blank_to_none(value)


class MedicineGuideForm(CamelModel):
    """Medicine guide form fields; `media` is an upload or a data URI string."""
    age: Optional[int] = None
    gender: Optional[Gender] = None
    symptoms: Optional[str] = None
    media: Optional[Any] = None

    @field_validator("symptoms", mode="before")
    @classmethod
    def strip_symptoms(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("age", "gender", "media", mode="before")
    @classmethod
    def blank_fields(cls, value):
        return blank_to_none(value)
