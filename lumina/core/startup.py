# lumina/core/startup.py
import logging

from fastapi import FastAPI

from lumina.core.config import settings
from lumina.services.llm.llm_services import create_gemini_client

logger = logging.getLogger(__name__)

llm_clients = {}


async def startup_event(app: FastAPI):
    """
    Initialize resources on application startup.
    """
    global llm_clients

    if settings.GEMINI_API_KEY:
        llm_clients["gemini"] = create_gemini_client(settings.GEMINI_API_KEY)
        logger.info(f"Gemini client initialized for model {settings.GEMINI_MODEL}.")
    else:
        # Requests are answered with a misconfiguration error until a key is supplied.
        logger.error("GEMINI_API_KEY is not set; interpretation requests will fail.")
