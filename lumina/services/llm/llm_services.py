# lumina/services/llm/llm_services.py
import logging
from typing import Optional

from google import genai
from google.genai import types

from lumina.core.config import Settings

logger = logging.getLogger(__name__)


class GeminiTextGenerator:
    """
    Single-shot text generation against the Gemini API.
    One request per call: no chat session, no streaming, no retries.
    """

    def __init__(self, client: genai.Client, settings: Settings):
        self.client = client
        self.model = settings.GEMINI_MODEL
        self.max_output_tokens = settings.INTERPRETATION_MAX_OUTPUT_TOKENS
        self.temperature = settings.INTERPRETATION_TEMPERATURE

    async def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        logger.debug(f"Querying {self.model} ({len(prompt)} prompt characters)")
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                max_output_tokens=self.max_output_tokens,
                temperature=self.temperature,
            ),
        )
        return response.text or ""


def create_gemini_client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)
