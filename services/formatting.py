"""Reply text for the voice/chat assistant."""
from typing import Optional

from models.medicine import AuthenticityOutput, IdentifyMedicineOutput, PersonalizedGuidanceOutput

ADVISOR_DISCLAIMER = "⚠️ Disclaimer: I am not a doctor. This is informational only."
GREETING = "Hi — I can help. Describe your symptoms or upload a medicine image to get started."


def authenticity_line(authenticity: Optional[AuthenticityOutput]) -> str:
    if authenticity is None:
        return ""
    if authenticity.is_fake_or_expired:
        return f"Authenticity check: {authenticity.reason}"
    return "Authenticity: Appears authentic/not expired."


def compose_medicine_reply(
    identification: Optional[IdentifyMedicineOutput],
    authenticity: Optional[AuthenticityOutput],
    guidance: Optional[PersonalizedGuidanceOutput],
) -> str:
    """Build the assistant's answer for a photographed medicine plus symptoms.

    Parts are separated by blank lines; parts with nothing to say are dropped.
    """
    name = identification.medicine_name if identification and identification.medicine_name else "Unknown"
    usage = identification.usage if identification and identification.usage else "Unknown"
    parts = [
        ADVISOR_DISCLAIMER,
        f"Identified medicine: {name}.",
        f"Purpose: {usage}.",
        authenticity_line(authenticity),
        f"Guidance: {guidance.suitability or 'N/A'}" if guidance else "",
        f"Alternatives: {guidance.alternatives}" if guidance and guidance.alternatives else "",
    ]
    return "\n\n".join(part for part in parts if part)


def compose_photo_only_reply(identification: Optional[IdentifyMedicineOutput]) -> str:
    name = identification.medicine_name if identification and identification.medicine_name else "a medicine"
    return f"I found {name}. Tell me your age, gender, and symptoms for personalized advice."
