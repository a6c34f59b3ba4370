import logging
from dataclasses import dataclass
from typing import Optional, Union

import requests

from shared.config import config

logger = logging.getLogger(__name__)

REVIEW_PATH = "/api/codereview"
NO_RESPONSE_TEXT = "❌ Error: No response from AI."


@dataclass(frozen=True)
class ReviewSuccess:
    text: str


@dataclass(frozen=True)
class ReviewFailure:
    message: str
    status_code: Optional[int] = None


ReviewResult = Union[ReviewSuccess, ReviewFailure]


class ReviewClient:
    """Posts code to the review endpoint and tags the outcome."""

    def __init__(self, base_url: str = None, timeout=None, session=None):
        self.base_url = (base_url or config.REVIEW_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.REVIEW_TIMEOUT
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.base_url + REVIEW_PATH

    def review(self, code: str, system_instruction: str) -> ReviewResult:
        try:
            response = self.session.post(
                self.url,
                json={"code": code, "systemInstruction": system_instruction},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Review request could not be sent: %s", e)
            return ReviewFailure(message=str(e))

        if not response.ok:
            return ReviewFailure(
                message=self._error_message(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            return ReviewFailure(
                message="Invalid response from review service",
                status_code=response.status_code,
            )

        text = data.get("text") if isinstance(data, dict) else None
        return ReviewSuccess(text=text or NO_RESPONSE_TEXT)

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = {}
        error = body.get("error") if isinstance(body, dict) else None
        return error or f"Request failed with {response.status_code}"
