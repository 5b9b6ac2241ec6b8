"""Emotion detection from a selfie or voice note, and advice for a mood."""
import logging
import random
from typing import List, Optional

from core.observability import mark_fallback, trace_flow
from flows.base import GeminiFlow
from models.emotion import DetectEmotionInput, DetectEmotionOutput, MoodAdviceInput, MoodAdviceOutput

logger = logging.getLogger(__name__)

# Neutral is only reported by the model, for unclear media
FALLBACK_EMOTIONS: List[str] = ["Happy", "Sad", "Stressed", "Tired", "Calm"]


class DetectEmotionFlow(GeminiFlow):
    name = "detectEmotionFlow"
    output_model = DetectEmotionOutput

    def __init__(self, model=None, rng: Optional[random.Random] = None):
        super().__init__(model)
        self.rng = rng or random.Random()

    @trace_flow
    def run(self, flow_input: DetectEmotionInput) -> DetectEmotionOutput:
        media = self._media(flow_input.media_uri)

        if not self.model:
            return self._fallback()

        kind = "voice recording" if media.mime_type.startswith("audio/") else "selfie"
        prompt = f"""You are a gentle wellbeing assistant. The attached {kind} was shared by a user who wants to check in on their mood.

Pick the single emotion that best matches the facial expression or tone of voice: Happy, Sad, Stressed, Tired, Calm or Neutral.
If the media is unclear, choose Neutral. Do not comment on appearance, identity or health."""
        try:
            return self._generate_structured(prompt, media)
        except Exception as e:
            logger.error(f"Emotion detection failed ({e}), using fallback", exc_info=True)
            return self._fallback()

    def _fallback(self) -> DetectEmotionOutput:
        mark_fallback()
        return DetectEmotionOutput(emotion=self.rng.choice(FALLBACK_EMOTIONS))


class MoodAdviceFlow(GeminiFlow):
    name = "getMoodAdviceFlow"
    output_model = MoodAdviceOutput

    @trace_flow
    def run(self, flow_input: MoodAdviceInput) -> MoodAdviceOutput:
        prompt = f"""You are an empathetic health and wellness advisor for Nuskha-e-Sehat. Your tone is warm, brief, and culturally empathetic.

A user's emotion has been detected as "{flow_input.emotion}". Their preferred language is {flow_input.user_lang}.

Follow these rules:
1. Create a warm greeting in the user's chosen language that kindly acknowledges the detected emotion. For example, if 'Sad', say something like "Aap kuch udaas lag rahe ho."
2. Provide 2-3 safe, practical, and short tips to help with that emotion. For 'Stressed', you might suggest a simple breathing exercise or a short walk. For 'Happy', you can provide positive reinforcement.
3. If the emotion is 'Sad' or 'Stressed' and seems persistent, gently suggest that talking to a professional or a helpline can be helpful, but keep it a soft suggestion.
4. Generate a short, positive daily affirmation in the user's chosen language.
5. Do not use complex medical jargon."""
        return self._generate_structured(prompt)
