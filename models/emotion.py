"""Emotion detection and mood advice schemas."""
from typing import List, Literal

from pydantic import Field

from config.settings import DEFAULT_USER_LANG
from models.base import WireModel

Emotion = Literal["Happy", "Sad", "Stressed", "Tired", "Calm", "Neutral"]


class DetectEmotionInput(WireModel):
    media_uri: str = Field(
        alias="mediaUri",
        description="A selfie image or voice recording, as a data URI that must include a MIME type "
        "and use Base64 encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'.",
    )


class DetectEmotionOutput(WireModel):
    emotion: Emotion = Field(description="The detected emotion.")


class MoodAdviceInput(WireModel):
    emotion: Emotion
    user_lang: str = Field(default=DEFAULT_USER_LANG, description='User\'s preferred language (e.g., "ur", "en").')


class MoodAdviceOutput(WireModel):
    greeting: str = Field(description="A warm greeting in the user's language acknowledging the emotion.")
    tips: List[str] = Field(description="A list of 2-3 safe, practical, and empathetic tips.")
    affirmation: str = Field(description="A short, positive daily affirmation in the user's language.")
