"""TranslateJargonFlow - Medical text explained simply in a local language."""
from core.observability import trace_flow
from flows.base import GeminiFlow
from models.assistant import TranslateJargonInput, TranslateJargonOutput


class TranslateJargonFlow(GeminiFlow):
    name = "translateMedicalJargon"
    output_model = TranslateJargonOutput

    @trace_flow
    def run(self, flow_input: TranslateJargonInput) -> TranslateJargonOutput:
        prompt = f"""You are a medical expert skilled at explaining complex medical terms in simple language.

Please translate the following medical text into a simple explanation in {flow_input.target_language}:
{flow_input.medical_text}"""
        return self._generate_structured(prompt)
