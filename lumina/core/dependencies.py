# lumina/core/dependencies.py
from typing import Optional

from fastapi import Depends

from lumina.core.config import Settings, get_settings
from lumina.core.startup import llm_clients
from lumina.services.llm.llm_services import GeminiTextGenerator, create_gemini_client


def get_text_generator(settings: Settings = Depends(get_settings)) -> Optional[GeminiTextGenerator]:
    """Dependency to provide the upstream text generator, or None when no credential is configured."""
    if not settings.GEMINI_API_KEY:
        return None

    client = llm_clients.get("gemini")
    if client is None:
        client = create_gemini_client(settings.GEMINI_API_KEY)
        llm_clients["gemini"] = client
    return GeminiTextGenerator(client, settings)
