# lumina/services/interpret_client.py
import logging
from typing import Optional

import httpx

from lumina.core.config import settings
from lumina.core.exceptions import NetworkError
from lumina.models.interpret_models import InterpretationRequest, InterpretationResponse

logger = logging.getLogger(__name__)


class InterpretationClient:
    """Calls the interpretation service once per reading. No retries."""

    def __init__(
        self,
        url: str = settings.INTERPRET_URL,
        timeout: float = settings.INTERPRET_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def interpret(self, request: InterpretationRequest) -> str:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=request.model_dump(mode="json"))
        except httpx.HTTPError as e:
            raise NetworkError(f"Interpretation service unreachable: {e}") from e

        if response.is_error:
            raise NetworkError(f"Interpretation service returned {response.status_code}: {_error_detail(response)}")

        try:
            payload = InterpretationResponse.model_validate(response.json())
        except ValueError as e:
            raise NetworkError(f"Malformed interpretation payload: {e}") from e

        if not payload.interpretation.strip():
            raise NetworkError("Interpretation service returned an empty interpretation")

        return payload.interpretation


def _error_detail(response: httpx.Response) -> str:
    try:
        return str(response.json().get("error", response.text))
    except (ValueError, AttributeError):
        return response.text
