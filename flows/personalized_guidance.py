"""PersonalizedGuidanceFlow - Medicine suitability for a specific user.

Combines the user's age, gender and symptoms with the identified medicine to
judge suitability, list side effects and warnings, and suggest safer
alternatives when the medicine looks risky.
"""
from core.observability import trace_flow
from flows.base import GeminiFlow
from models.medicine import PersonalizedGuidanceInput, PersonalizedGuidanceOutput


class PersonalizedGuidanceFlow(GeminiFlow):
    name = "personalizedHealthGuidance"
    output_model = PersonalizedGuidanceOutput

    @trace_flow
    def run(self, flow_input: PersonalizedGuidanceInput) -> PersonalizedGuidanceOutput:
        return self._generate_structured(self._build_prompt(flow_input))

    def _build_prompt(self, flow_input: PersonalizedGuidanceInput) -> str:
        # Age 0 means the form left it blank
        age = flow_input.age if flow_input.age else "Not provided"
        return f"""You are a helpful AI assistant specialized in providing personalized health guidance.

Based on the user's age, gender, symptoms, and the identified medicine details, provide health guidance, check the medicine's suitability, and warn of potential side effects.

User Details:
- Age: {age}
- Gender: {flow_input.gender}
- Symptoms: {flow_input.symptoms}

Medicine Details:
- Name: {flow_input.medicine_name or "Unknown"}
- Usage: {flow_input.medicine_usage or "Unknown"}

Instructions:
1. Assess the suitability of the medicine for the user. Clearly state if it is risky or not recommended.
2. List potential side effects of the medicine.
3. Provide any relevant warnings or precautions for the user.
4. If the medicine is unsuitable or risky, suggest safer, commonly available alternatives or strongly advise consulting a doctor."""
