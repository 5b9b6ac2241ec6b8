"""Doctor vs. herbalist debate schemas."""
from typing import List, Literal, Optional

from pydantic import Field

from config.settings import DEFAULT_USER_LANG
from models.base import CamelModel, WireModel

Urgency = Literal["low", "watch", "urgent"]
Persona = Literal["doctor", "herbalist"]


class DebateInput(WireModel):
    symptom_text: str = Field(min_length=1, description="The user's description of their symptoms.")
    user_lang: str = Field(default=DEFAULT_USER_LANG, description='User\'s preferred language (e.g., "ur", "en").')
    age_bracket: str = Field(default="adult", description='User\'s age bracket (e.g., "child", "adult", "senior").')


class AgentTurn(WireModel):
    persona: Persona
    summary: str = Field(description="1-line summary in the user's language.")
    recommendations: List[str] = Field(description="List of recommendations.")
    urgency: Urgency
    confidence: float = Field(ge=0, le=1)
    sources: List[str] = Field(default_factory=list)
    explain_short: str = Field(description="1-2 sentence rationale in simple language.")


class ArbiterVerdict(WireModel):
    final_summary: str = Field(description="1-3 line user-facing summary.")
    final_recommendation: List[str] = Field(description="Synthesized list of recommendations.")
    final_urgency: Urgency
    rationale: str = Field(description="1-2 sentences explaining the decision.")
    sources: List[str] = Field(default_factory=list)
    followup_question: Optional[str] = Field(default=None, description="An optional clarifying question for the user.")


class DebateResult(CamelModel):
    user_input: DebateInput
    doctor_turn: AgentTurn
    herbalist_turn: AgentTurn
    arbiter_verdict: ArbiterVerdict
