"""GeneralHealthQueryFlow - Freeform advice when no medicine is involved.

Design Decisions:
    1. Disclaimer First: every answer must open with the "not a real doctor" line.
    2. Safety Handoff: red-flag symptoms are detected before prompting and the
       model is told to send the user to a doctor or hospital.
    3. Cultural Register: simple everyday language, local metaphors where natural,
       answering in the language the user wrote in.
    4. Streaming: the same prompt can be streamed chunk by chunk.
"""
import logging
from typing import Dict, Iterator, List

from core.errors import AIUnavailableError, FlowError, is_transient
from core.observability import Tracer, trace_flow
from flows.base import GeminiFlow
from models.medicine import GeneralHealthQueryInput

logger = logging.getLogger(__name__)

DISCLAIMER = "⚠️ I am not a real doctor. This is for advice only."

OVERLOADED_MESSAGE = "The AI assistant is currently unavailable. Please try again in a few moments."
FAILED_MESSAGE = "An unexpected error occurred while getting your health recommendation."

SAFETY_KEYWORDS: Dict[str, List[str]] = {
    "urgent": ["chest pain", "difficulty breathing", "shortness of breath", "can't breathe",
               "unconscious", "fainted", "seizure", "suicidal", "self-harm", "overdose",
               "severe bleeding", "blood in vomit", "stroke", "heart attack"],
    "recommend_doctor": ["high fever", "fever for", "days", "weeks", "blood in",
                         "persistent", "getting worse", "dizziness", "pregnant"],
}


def detect_red_flags(symptoms: str) -> Dict[str, List[str]]:
    """Return the safety keywords found in the symptom text, by level."""
    text = (symptoms or "").lower()
    return {
        level: [keyword for keyword in keywords if keyword in text]
        for level, keywords in SAFETY_KEYWORDS.items()
    }


class GeneralHealthQueryFlow(GeminiFlow):
    name = "generalHealthQuery"

    @trace_flow
    def run(self, flow_input: GeneralHealthQueryInput) -> str:
        prompt = self._build_prompt(flow_input)
        try:
            text = self._generate_text(prompt)
        except AIUnavailableError:
            raise
        except Exception as e:
            raise self._map_error(e) from e
        return self._ensure_disclaimer(text)

    def stream(self, flow_input: GeneralHealthQueryInput) -> Iterator[str]:
        """Yield the answer in chunks as the model produces them.

        Chunks are held back while they could still be the start of the
        disclaimer, so a disclaimer split across chunks is not doubled.
        """
        prompt = self._build_prompt(flow_input)
        with Tracer(self.name, flow_input):
            try:
                pending = ""
                checked = False
                for chunk in self._stream_text(prompt):
                    if checked:
                        yield chunk
                        continue
                    pending += chunk
                    head = pending.lstrip()
                    if len(head) < len(DISCLAIMER) and DISCLAIMER.startswith(head):
                        continue
                    checked = True
                    yield self._ensure_disclaimer(pending)
                if not checked:
                    yield self._ensure_disclaimer(pending)
            except AIUnavailableError:
                raise
            except Exception as e:
                raise self._map_error(e) from e

    def _map_error(self, e: Exception) -> FlowError:
        logger.error(f"Error in generalHealthQuery: {e}")
        if is_transient(e):
            return AIUnavailableError(OVERLOADED_MESSAGE)
        return FlowError(FAILED_MESSAGE)

    def _ensure_disclaimer(self, text: str) -> str:
        text = text.lstrip()
        if text.startswith(DISCLAIMER):
            return text
        return f"{DISCLAIMER}\n\n{text}"

    def _build_prompt(self, flow_input: GeneralHealthQueryInput) -> str:
        flags = detect_red_flags(flow_input.symptoms)
        safety_block = ""
        if flags["urgent"]:
            logger.warning(f"Urgent symptom keywords detected: {flags['urgent']}")
            safety_block = (
                f"\nURGENT: The user mentioned {', '.join(flags['urgent'])}. Tell them clearly to go to the "
                "nearest hospital or call Rescue 1122 now, before any other advice.\n"
            )
        elif flags["recommend_doctor"]:
            safety_block = (
                "\nThe symptoms may need a professional check-up. Recommend seeing a doctor soon.\n"
            )

        language_line = (
            f"Respond in {flow_input.user_lang}."
            if flow_input.user_lang
            else "Respond in the language the user most likely used (e.g., Urdu, English, or a mix)."
        )

        return f"""You are a caring and empathetic AI Doctor inside the app Nuskha-e-Sehat. You speak in simple, everyday language and can use cultural proverbs and metaphors to connect with users from Pakistan.

IMPORTANT SAFETY RULE: You MUST start every single response with the disclaimer: "{DISCLAIMER}"

A user is asking for health advice. Their details are:
- Symptoms: "{flow_input.symptoms}"
- Age: {flow_input.age or 'Not provided'}
- Gender: {flow_input.gender or 'Not provided'}
{safety_block}
Your tasks:
1. Start with the mandatory disclaimer.
2. Acknowledge the user's symptoms in a caring tone.
3. Provide simple advice (e.g., rest, hydration, common home remedies). Use simple Urdu/local metaphors if it feels natural. For example, instead of "stay hydrated", you could say "Jism ko pani ki zaroorat hai, jese podon ko hoti hai."
4. Suggest safe, common over-the-counter medicines if appropriate for the symptoms.
5. If the symptoms sound serious (e.g., chest pain, high fever for multiple days, difficulty breathing), you MUST strongly advise them to see a real doctor immediately or go to a hospital.
6. Keep your response concise (4-6 lines). {language_line}"""
