"""VoiceAssistantFlow - Spoken symptoms plus medicine details to guidance.

The model hears the recording directly, so no separate transcription step
is needed for this flow.
"""
from core.observability import trace_flow
from flows.base import GeminiFlow
from models.assistant import VoiceAssistantInput, VoiceAssistantOutput


class VoiceAssistantFlow(GeminiFlow):
    name = "voiceBasedAssistantForSymptoms"
    output_model = VoiceAssistantOutput

    @trace_flow
    def run(self, flow_input: VoiceAssistantInput) -> VoiceAssistantOutput:
        prompt = f"""You are a helpful AI assistant that understands voice input in local languages, identifies symptoms, and provides personalized guidance related to the medicine the user uploaded.

The user's voice input is attached as audio. Transcribe the audio to text and extract any mentioned symptoms or conditions.

Based on the identified symptoms, medicine details, and user details, provide solutions, assistance, and guidance.

Medicine Details: {flow_input.medicine_details}
User Details: {flow_input.user_details}

Provide your response in a clear and accessible format."""
        return self._generate_structured(prompt, self._media(flow_input.audio_data_uri))
