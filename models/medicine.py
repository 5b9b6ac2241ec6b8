"""Medicine identification, authenticity and guidance schemas."""
from typing import Literal, Optional

from pydantic import Field

from models.base import CamelModel

Gender = Literal["male", "female", "other"]

DATA_URI_HINT = (
    "as a data URI that must include a MIME type and use Base64 encoding. "
    "Expected format: 'data:<mimetype>;base64,<encoded_data>'."
)


class IdentifyMedicineInput(CamelModel):
    photo_data_uri: str = Field(description=f"A photo or a video of a medicine, {DATA_URI_HINT}")


class IdentifyMedicineOutput(CamelModel):
    medicine_name: str = Field(description="The name of the identified medicine (brand and common name).")
    usage: str = Field(description="The purpose of the medicine in simple, non-medical terms.")
    batch_number: Optional[str] = Field(default=None, description="The batch number extracted from the packaging.")
    expiry_date: Optional[str] = Field(default=None, description="The expiry date extracted from the packaging (YYYY-MM-DD).")
    manufacturer: Optional[str] = Field(default=None, description="The manufacturer of the medicine.")


class AuthenticityInput(CamelModel):
    photo_data_uri: str = Field(description=f"A photo of the medicine, {DATA_URI_HINT}")


class AuthenticityOutput(CamelModel):
    is_fake_or_expired: bool = Field(description="Whether the medicine is fake or expired.")
    reason: str = Field(description="The reason why the medicine is flagged as fake or expired.")


class PersonalizedGuidanceInput(CamelModel):
    age: int = Field(description="The age of the user in years.")
    gender: Gender = Field(description="The gender of the user.")
    symptoms: str = Field(description="A description of the user's symptoms.")
    medicine_name: str = Field(description="The name of the identified medicine.")
    medicine_usage: str = Field(description="The intended usage of the medicine.")


class PersonalizedGuidanceOutput(CamelModel):
    suitability: str = Field(
        description="An assessment of the medicine's suitability for the user based on their age, gender, "
        "and symptoms. State if it is risky."
    )
    side_effects: str = Field(description="Potential side effects of the medicine.")
    warnings: str = Field(description="Any warnings or precautions associated with the medicine for the user.")
    alternatives: Optional[str] = Field(
        default=None,
        description="If the medicine is unsuitable, suggest safer common alternatives or advise to see a doctor.",
    )


class GeneralHealthQueryInput(CamelModel):
    symptoms: str = Field(min_length=1, description="A description of the user's symptoms.")
    age: Optional[int] = Field(default=None, description="The age of the user in years.")
    gender: Optional[Gender] = Field(default=None, description="The gender of the user.")
    user_lang: Optional[str] = Field(default=None, description="The user's preferred language.")
