"""DebateFlow - Doctor vs. Herbalist, settled by an Arbiter.

Design Decisions:
    1. Sequential Personas: the doctor answers first, the herbalist second,
       and the arbiter sees both turns before deciding.
    2. Safety Wins: the arbiter's urgency is never lower than either
       persona's urgency.
    3. Canned Debate: without a model (or if any persona fails) the flow
       returns a fixed, realistic common-cold debate echoing the user input.
"""
import logging
from typing import Any, Dict

from core.observability import mark_fallback, trace_flow
from flows.base import GeminiFlow
from models.debate import AgentTurn, ArbiterVerdict, DebateInput, DebateResult

logger = logging.getLogger(__name__)

URGENCY_RANK = {"low": 0, "watch": 1, "urgent": 2}

CANNED_DOCTOR_TURN: Dict[str, Any] = {
    "persona": "doctor",
    "summary": "Aap ko 2 din se khansi aur halki bukhar hai.",
    "recommendations": [
        "Rest and hydrate",
        "Take paracetamol for fever as needed",
        "See clinic if fever >3 days or breathing worsens",
    ],
    "urgency": "watch",
    "confidence": 0.78,
    "sources": ["WHO general fever guidance"],
    "explain_short": "Symptoms suggest a common viral illness; treat with fluids and rest. "
                     "Visit clinic if it persists.",
}

CANNED_HERBALIST_TURN: Dict[str, Any] = {
    "persona": "herbalist",
    "summary": "Gharaylū tor par tulsi ki chai aur steam acchi rehti hai.",
    "recommendations": [
        "Tulsi (holy basil) tea twice daily",
        "Steam inhalation with pepper and salt",
        "Avoid cold drinks and heavy fried food",
    ],
    "urgency": "low",
    "confidence": 0.85,
    "sources": ["Traditional remedies commonly used in Punjab"],
    "explain_short": "Tulsi aur steam se gale ki jalan kam hoti hai aur khansi me rahat milti hai.",
}

CANNED_ARBITER_VERDICT: Dict[str, Any] = {
    "final_summary": "Aap ke lakhat viral infection jaisa lagta hai. Ghar pe aaram, zyada paani aur "
                     "paracetamol theek hai; subah shaam tulsi ka use madadgar ho sakta hai.",
    "final_recommendation": [
        "Rest & hydrate",
        "Paracetamol for fever as needed",
        "Tulsi tea twice daily for relief",
        "See clinic if fever >3 days or breathing worsens",
    ],
    "final_urgency": "watch",
    "rationale": "Doctor suggests standard symptomatic care; herbalist provides supportive remedies that "
                 "are low risk, so both combined are safe for now.",
    "sources": ["WHO guidance", "Traditional remedy references"],
    "followup_question": "Kya aap ko saans lene me takleef hai? (haan/na)",
}


class DebateFlow(GeminiFlow):
    name = "debateFlow"
    output_model = DebateResult

    @trace_flow
    def run(self, flow_input: DebateInput) -> DebateResult:
        if not self.model:
            return self._fallback(flow_input)

        try:
            doctor = self._generate_structured(self._doctor_prompt(flow_input), output_model=AgentTurn)
            herbalist = self._generate_structured(self._herbalist_prompt(flow_input), output_model=AgentTurn)
            verdict = self._generate_structured(
                self._arbiter_prompt(flow_input, doctor, herbalist), output_model=ArbiterVerdict
            )
        except Exception as e:
            logger.error(f"Debate generation failed ({e}), using canned debate", exc_info=True)
            return self._fallback(flow_input)

        # Personas are fixed by position, whatever the model wrote
        doctor.persona = "doctor"
        herbalist.persona = "herbalist"
        floor = max(doctor.urgency, herbalist.urgency, key=URGENCY_RANK.__getitem__)
        if URGENCY_RANK[verdict.final_urgency] < URGENCY_RANK[floor]:
            logger.info(f"Arbiter urgency raised from {verdict.final_urgency} to {floor}")
            verdict.final_urgency = floor

        return DebateResult(
            user_input=flow_input,
            doctor_turn=doctor,
            herbalist_turn=herbalist,
            arbiter_verdict=verdict,
        )

    # === Persona prompts ===

    def _patient_block(self, flow_input: DebateInput) -> str:
        return f"""PATIENT:
- Symptoms: "{flow_input.symptom_text}"
- Age bracket: {flow_input.age_bracket}
- Preferred language: {flow_input.user_lang}"""

    def _doctor_prompt(self, flow_input: DebateInput) -> str:
        return f"""You are the DOCTOR in Nuskha-e-Sehat's health debate. You follow evidence-based general medicine (WHO-style guidance) for patients in Pakistan.

{self._patient_block(flow_input)}

RULES:
- Write "summary" and "explain_short" in the patient's preferred language, simple words.
- 2-4 practical recommendations. Only common over-the-counter medicines, never prescription drugs or doses for children.
- urgency: "urgent" for red flags (chest pain, breathing difficulty, unconsciousness, severe bleeding), "watch" when a clinic visit may be needed, otherwise "low".
- persona must be "doctor". Do not diagnose; describe what the symptoms suggest."""

    def _herbalist_prompt(self, flow_input: DebateInput) -> str:
        return f"""You are the HERBALIST (hakeem) in Nuskha-e-Sehat's health debate. You know traditional desi home remedies (tulsi, adrak, haldi, shehad, steam).

{self._patient_block(flow_input)}

RULES:
- Write "summary" and "explain_short" in the patient's preferred language, simple words.
- 2-4 gentle home remedies that are low risk. Never tell the patient to stop a prescribed medicine.
- If the symptoms sound dangerous, set urgency "urgent" and say a doctor is needed first.
- persona must be "herbalist". Sources are the traditions the remedies come from."""

    def _arbiter_prompt(self, flow_input: DebateInput, doctor: AgentTurn, herbalist: AgentTurn) -> str:
        return f"""You are the ARBITER in Nuskha-e-Sehat's health debate. A doctor and a herbalist have each advised the same patient. Combine their advice into one safe answer.

{self._patient_block(flow_input)}

DOCTOR SAID:
{doctor.model_dump_json()}

HERBALIST SAID:
{herbalist.model_dump_json()}

RULES:
- Safety first: keep every doctor warning. Drop any remedy that conflicts with the doctor's advice.
- final_urgency must not be lower than the doctor's urgency ("{doctor.urgency}") or the herbalist's urgency ("{herbalist.urgency}").
- final_summary is 1-3 lines in the patient's preferred language.
- rationale explains in 1-2 sentences why the combined advice is safe.
- Ask one short followup_question if an answer would change the urgency."""

    def _fallback(self, flow_input: DebateInput) -> DebateResult:
        mark_fallback()
        return DebateResult(
            user_input=flow_input,
            doctor_turn=AgentTurn.model_validate(CANNED_DOCTOR_TURN),
            herbalist_turn=AgentTurn.model_validate(CANNED_HERBALIST_TURN),
            arbiter_verdict=ArbiterVerdict.model_validate(CANNED_ARBITER_VERDICT),
        )
