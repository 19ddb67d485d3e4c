# docingest/generation/client.py
# ============================================================
# Generation Client — hands a CanonicalDocument to the
# generative-content service
# ============================================================
# The service itself (prompts, model choice) lives elsewhere.
# This module only fixes the request shape:
#
#   POST /api/generate
#   {"documentContent": "<text>" | [{"mimeType": ..., "data": <b64>}, ...],
#    "outputType": "summary" | "briefingNote" | "transmittalNote"}
#
#   -> {"text": "<generated prose>"}
# ============================================================

from enum import Enum
from typing import Optional

import httpx
from rich.markup import escape

from config.settings import settings
from docingest.document.models import CanonicalDocument
from docingest.errors import GenerationError
from docingest.utils.logger import get_logger

logger = get_logger(__name__)

GENERATE_PATH = "/api/generate"


class OutputType(str, Enum):
    """Kinds of prose the generative service can produce from a document."""
    SUMMARY = "summary"
    BRIEFING_NOTE = "briefingNote"
    TRANSMITTAL_NOTE = "transmittalNote"


def build_generation_request(document: CanonicalDocument, output_type: OutputType) -> dict:
    """Build the JSON body sent to the generation endpoint."""
    return {
        "documentContent": document.to_payload(),
        "outputType": OutputType(output_type).value,
    }


def _parse_response(response: httpx.Response) -> str:
    if response.is_error:
        try:
            message = response.json().get("error") or response.reason_phrase
        except ValueError:
            message = response.reason_phrase
        raise GenerationError(
            f"Failed to communicate with the server. Status: {response.status_code}. "
            f"Message: {message}",
            {"status_code": response.status_code},
        )

    try:
        text = response.json().get("text")
    except ValueError as e:
        raise GenerationError("Received an invalid response from the server.") from e
    if not text:
        raise GenerationError("Received an invalid response from the server.")
    return text


class GenerationClient:
    """
    HTTP client for the generation endpoint (sync and async).

    Example:
        >>> client = GenerationClient()
        >>> prose = client.generate(document, OutputType.SUMMARY)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.generation_api_url
        self.timeout_s = timeout_s or settings.generation_timeout_s
        self._transport = transport
        self._async_transport = async_transport

    def generate(self, document: CanonicalDocument, output_type: OutputType) -> str:
        """Send the document and return the generated text."""
        payload = build_generation_request(document, output_type)
        logger.info(f"Requesting [bold]{payload['outputType']}[/bold] from {escape(self.base_url)}")

        try:
            with httpx.Client(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout_s),
                transport=self._transport,
            ) as client:
                response = client.post(GENERATE_PATH, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Generation request failed: {escape(str(e))}")
            raise GenerationError(f"Failed to communicate with the server: {e}") from e

        return _parse_response(response)

    async def agenerate(self, document: CanonicalDocument, output_type: OutputType) -> str:
        """Async variant of generate()."""
        payload = build_generation_request(document, output_type)
        logger.info(f"Requesting [bold]{payload['outputType']}[/bold] from {escape(self.base_url)}")

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout_s),
                transport=self._async_transport,
            ) as client:
                response = await client.post(GENERATE_PATH, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Async generation request failed: {escape(str(e))}")
            raise GenerationError(f"Failed to communicate with the server: {e}") from e

        return _parse_response(response)
