"""Nuskha-e-Sehat HTTP API.

Exposes each server action as a JSON endpoint. Actions always answer with
HTTP 200 and the `{success, data}` / `{success, error}` envelope; only a
malformed request body is rejected by FastAPI itself.

Usage:
    python main.py
    uvicorn main:app --reload
"""
import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from config.settings import CORS_ORIGINS, EMERGENCY_HELPLINES, GOOGLE_API_KEY
from core.media import UploadedMedia
from core.observability import get_metrics_summary
from models import (
    AudioRequest,
    DebateInput,
    DetectEmotionInput,
    FoodInteractionInput,
    GeneralHealthQueryInput,
    HealthAdvisorInput,
    MedicineGuideForm,
    MoodAdviceInput,
    PhotoRequest,
    SpeechRequest,
    TranslateJargonInput,
    VoiceAssistantInput,
)
from services import actions

logger = logging.getLogger("nuskha.api")

app = FastAPI(
    title="Nuskha-e-Sehat",
    description="AI health assistant: medicine checks, symptom guidance, voice, mood and cough screening.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _read_upload(upload: Optional[UploadFile]) -> Optional[UploadedMedia]:
    # Browsers send an empty part when the file input was left blank
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    if not data:
        return None
    return UploadedMedia(
        content_type=upload.content_type or "application/octet-stream",
        data=data,
        filename=upload.filename,
    )


# === Medicine check ===

@app.post("/api/medicine-guide")
async def medicine_guide(
    age: Optional[str] = Form(default=None),
    gender: Optional[str] = Form(default=None),
    symptoms: Optional[str] = Form(default=None),
    media: Optional[UploadFile] = File(default=None),
    media_data_uri: Optional[str] = Form(default=None, alias="mediaDataUri"),
) -> dict:
    """Medicine photo/video and/or symptoms from the dashboard form."""
    upload = await _read_upload(media)
    raw = {"age": age, "gender": gender, "symptoms": symptoms, "media": upload or media_data_uri}
    return (await actions.get_medicine_guide(raw)).to_wire()


@app.post("/api/medicine/scan")
async def medicine_scan(payload: PhotoRequest) -> dict:
    """One camera frame in, identification and authenticity out."""
    return (await actions.scan_medicine(payload.photo_data_uri)).to_wire()


@app.post("/api/food-interactions")
async def food_interactions(payload: FoodInteractionInput) -> dict:
    return (await actions.get_food_interaction_guide(payload)).to_wire()


# === Language and voice ===

@app.post("/api/jargon/translate")
async def jargon_translate(payload: TranslateJargonInput) -> dict:
    return (await actions.translate_jargon(payload)).to_wire()


@app.post("/api/voice/guidance")
async def voice_guidance(payload: VoiceAssistantInput) -> dict:
    return (await actions.get_voice_guidance(payload)).to_wire()


@app.post("/api/voice/transcribe")
async def voice_transcribe(payload: AudioRequest) -> dict:
    return (await actions.transcribe_symptoms(payload.audio_data_uri)).to_wire()


@app.post("/api/assistant")
async def assistant(payload: HealthAdvisorInput) -> dict:
    """Voice/text/photo assistant; always answers with `{text}`."""
    return (await actions.run_health_advisor(payload)).to_wire()


@app.post("/api/assistant/speech")
async def assistant_speech(payload: SpeechRequest) -> dict:
    return (await actions.get_audio_for_text(payload.text, payload.lang)).to_wire()


@app.post("/api/health-query/stream")
def health_query_stream(payload: GeneralHealthQueryInput) -> StreamingResponse:
    return StreamingResponse(actions.stream_health_query(payload), media_type="text/plain; charset=utf-8")


# === Cough, debate, mood ===

@app.post("/api/cough/analyze")
async def cough_analyze(payload: AudioRequest) -> dict:
    return (await actions.analyze_cough(payload.audio_data_uri)).to_wire()


@app.post("/api/debate")
async def debate(payload: DebateInput) -> dict:
    return (await actions.run_debate(payload)).to_wire()


@app.post("/api/emotion/detect")
async def emotion_detect(payload: DetectEmotionInput) -> dict:
    return (await actions.get_emotion_from_media(payload)).to_wire()


@app.post("/api/emotion/advice")
async def emotion_advice(payload: MoodAdviceInput) -> dict:
    return (await actions.get_advice_for_mood(payload)).to_wire()


# === Static and operational ===

@app.get("/api/emergency/helplines")
def emergency_helplines() -> dict:
    return {"helplines": EMERGENCY_HELPLINES}


@app.get("/api/metrics")
def flow_metrics() -> dict:
    return get_metrics_summary()


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "ai_configured": bool(GOOGLE_API_KEY)}


def main():
    if not GOOGLE_API_KEY:
        logger.warning("GOOGLE_API_KEY not found. Cough, mood and debate will use fallbacks; other flows will fail.")
    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
