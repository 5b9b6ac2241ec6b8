"""Medicine/food interaction schemas, focused on a desi diet."""
from typing import List

from pydantic import Field

from models.base import CamelModel


class FoodInteractionInput(CamelModel):
    medicine_name: str = Field(
        min_length=1,
        description="The name of the medicine to check for food interactions (e.g., Panadol, Amoxicillin).",
    )


class FoodItem(CamelModel):
    name: str = Field(description='The name of the food item in English (e.g., "Milk", "Tea", "Paratha").')
    name_urdu: str = Field(description='The name of the food item in Urdu (e.g., "دودھ", "چائے", "پراٹھا").')
    reason: str = Field(description="A simple, one-sentence explanation for the interaction in simple Urdu.")


class FoodInteractions(CamelModel):
    avoid: List[FoodItem] = Field(default_factory=list, description="Foods to strictly avoid with this medicine.")
    warning: List[FoodItem] = Field(
        default_factory=list, description="Foods to be cautious with or consume at a different time."
    )
    safe: List[FoodItem] = Field(default_factory=list, description="Foods that are safe to consume with the medicine.")


class FoodInteractionOutput(CamelModel):
    medicine_name: str = Field(description="The recognized name of the medicine.")
    purpose: str = Field(description='The primary purpose of the medicine in simple Urdu (e.g., "Bukhaar kam karna").')
    interactions: FoodInteractions
    timing_suggestion: str = Field(
        description="A general suggestion on when to take the medicine in simple Urdu "
        '(e.g., "Khana khane ke 1 ghantay baad pani ke sath lein").'
    )
