"""
HealthRisk Narrative Service Client

Optional external text generator for the report narrative.

STRICT MODE: every failure (unconfigured, timeout, connection error,
non-200, empty body) raises NarrativeUnavailable. Callers recover with the
template narrative; the service is never required to produce a report.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx

from ..config import NARRATIVE_SERVICE_TOKEN, NARRATIVE_SERVICE_URL, NARRATIVE_TIMEOUT_SECONDS
from .models import DomainScore

logger = logging.getLogger(__name__)

NARRATIVE_ENDPOINT = "/v1/narratives"


# ============================================
# ERROR CODES
# ============================================

class NarrativeError(Enum):
    NARRATIVE_NOT_CONFIGURED = "NARRATIVE_NOT_CONFIGURED"
    NARRATIVE_TIMEOUT = "NARRATIVE_TIMEOUT"
    NARRATIVE_UNREACHABLE = "NARRATIVE_UNREACHABLE"
    NARRATIVE_API_ERROR = "NARRATIVE_API_ERROR"


class NarrativeUnavailable(Exception):
    """Raised whenever the narrative service cannot produce text."""

    def __init__(self, error_code: NarrativeError, message: str):
        self.error_code = error_code
        self.message = message
        super().__init__(f"{error_code.value}: {message}")


# ============================================
# CLIENT
# ============================================

class HttpNarrativeService:
    """Narrative collaborator backed by an HTTP text-generation service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = NARRATIVE_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (NARRATIVE_SERVICE_URL if base_url is None else base_url).rstrip("/")
        self.token = NARRATIVE_SERVICE_TOKEN if token is None else token
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def generate_narrative(
        self,
        answers: Mapping[str, Any],
        domain_scores: Sequence[DomainScore],
    ) -> str:
        if not self.configured:
            raise NarrativeUnavailable(
                NarrativeError.NARRATIVE_NOT_CONFIGURED,
                "NARRATIVE_SERVICE_URL is not set",
            )

        payload = {
            "answers": dict(answers),
            "domainScores": [d.to_dict() for d in domain_scores],
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}{NARRATIVE_ENDPOINT}",
                    json=payload,
                    headers=self._headers(),
                )

                if response.status_code != 200:
                    raise NarrativeUnavailable(
                        NarrativeError.NARRATIVE_API_ERROR,
                        f"Narrative service returned HTTP {response.status_code}",
                    )

                text = (response.json() or {}).get("narrative")
                if not isinstance(text, str) or not text.strip():
                    raise NarrativeUnavailable(
                        NarrativeError.NARRATIVE_API_ERROR,
                        "Narrative service returned an empty narrative",
                    )
                return text.strip()

        except httpx.TimeoutException:
            raise NarrativeUnavailable(
                NarrativeError.NARRATIVE_TIMEOUT,
                f"Narrative service timed out after {self.timeout}s",
            )
        except httpx.ConnectError as e:
            raise NarrativeUnavailable(
                NarrativeError.NARRATIVE_UNREACHABLE,
                f"Cannot connect to narrative service: {str(e)}",
            )
        except NarrativeUnavailable:
            raise
        except Exception as e:
            raise NarrativeUnavailable(
                NarrativeError.NARRATIVE_API_ERROR,
                f"Unexpected error calling narrative service: {str(e)}",
            )


def get_narrative_service() -> Optional[HttpNarrativeService]:
    """Configured client, or None when NARRATIVE_SERVICE_URL is not set."""
    service = HttpNarrativeService()
    if not service.configured:
        logger.info("[STARTUP] Narrative service not configured, reports use template narratives")
        return None
    return service
