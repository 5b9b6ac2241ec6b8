"""DetectFakeOrExpiredMedicineFlow - Visual authenticity and expiry check."""
from core.observability import trace_flow
from flows.base import GeminiFlow
from models.medicine import AuthenticityInput, AuthenticityOutput

PROMPT = """You are an expert in identifying fake and expired medicine.

You will analyze the attached image of the medicine and determine if it is potentially fake or expired based on visual cues, labeling, and any available information.

Based on your analysis, determine if the medicine is fake or expired. If it is, provide a reason for your determination. If it appears authentic and in date, say what you checked."""


class DetectFakeOrExpiredMedicineFlow(GeminiFlow):
    name = "detectFakeOrExpiredMedicine"
    output_model = AuthenticityOutput

    @trace_flow
    def run(self, flow_input: AuthenticityInput) -> AuthenticityOutput:
        return self._generate_structured(PROMPT, self._media(flow_input.photo_data_uri))
