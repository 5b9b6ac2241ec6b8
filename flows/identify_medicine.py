"""IdentifyMedicineFlow - Medicine recognition from a photo or short video.

Reads the packaging in the media and extracts the name, purpose, batch
number, expiry date and manufacturer.
"""
import logging

from core.observability import trace_flow
from flows.base import GeminiFlow
from models.medicine import IdentifyMedicineInput, IdentifyMedicineOutput

logger = logging.getLogger(__name__)

PROMPT = """You are an expert pharmacist. You will identify the medicine in the video or image and extract key details.

Analyze the attached media and extract:
1. The medicine name (both brand and common name if available).
2. The purpose of the medicine, explained in simple, non-medical terms.
3. The batch number from the packaging.
4. The expiry date from the packaging, formatted as YYYY-MM-DD.
5. The manufacturer of the medicine.

Leave a field out if it cannot be read from the packaging. Do not guess batch numbers or dates."""


class IdentifyMedicineFlow(GeminiFlow):
    name = "identifyMedicineFromImage"
    output_model = IdentifyMedicineOutput

    @trace_flow
    def run(self, flow_input: IdentifyMedicineInput) -> IdentifyMedicineOutput:
        media = self._media(flow_input.photo_data_uri)
        result = self._generate_structured(PROMPT, media)
        logger.info(f"Identified medicine: {result.medicine_name}")
        return result
