"""HTTP client for the BLS public timeseries API."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

from scm_salary.core.config import DEFAULT_BLS_API_URL, BlsSettings, ConfigurationError
from scm_salary.core.logger import get_logger

from .schemas import BlsRequest, BlsResponse
from .series import build_series_ids

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with a fixed delay between attempts."""

    max_attempts: int = 3
    delay: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")


class BlsClient:
    """Fetch the three OEWS series for one occupation and year.

    ``fetch_series`` never raises for transport or API failures: once the
    retry policy is exhausted it returns ``None`` and the caller treats the
    occupation as having no data.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_BLS_API_URL,
        timeout: float = 30.0,
        retry: RetryPolicy | None = None,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not api_key:
            raise ConfigurationError("BLS API key not configured. Set BLS_KEY environment variable.")
        self.api_key = api_key
        self.api_url = api_url
        self.retry = retry or RetryPolicy()
        self._sleep = sleep
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)
        self.attempts_made = 0

    @classmethod
    def from_settings(cls, settings: BlsSettings, **kwargs: Any) -> "BlsClient":
        return cls(
            settings.api_key,
            api_url=settings.api_url,
            timeout=settings.timeout,
            retry=RetryPolicy(settings.max_attempts, settings.retry_delay),
            **kwargs,
        )

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "BlsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def build_request(self, occupation_code: str, year: int) -> BlsRequest:
        return BlsRequest(
            seriesid=list(build_series_ids(occupation_code)),
            startyear=str(year),
            endyear=str(year),
            registrationkey=self.api_key,
        )

    def fetch_series(self, occupation_code: str, year: int) -> Optional[dict[str, Any]]:
        """Return the decoded response envelope, or ``None`` after exhausting retries."""

        payload = self.build_request(occupation_code, year).model_dump()
        attempts = self.retry.max_attempts

        for attempt in range(1, attempts + 1):
            self.attempts_made += 1
            try:
                response = self._http.post(self.api_url, json=payload)
                response.raise_for_status()
                data = response.json()
                envelope = BlsResponse.model_validate(data)
            except (httpx.HTTPError, ValueError) as exc:
                # pydantic.ValidationError and JSONDecodeError are ValueErrors.
                logger.warning("API call attempt %s failed: %s", attempt, exc)
            else:
                if envelope.succeeded:
                    return data
                detail = "; ".join(str(m) for m in envelope.message)
                logger.warning(
                    "BLS API returned status: %s%s",
                    envelope.status,
                    f" ({detail})" if detail else "",
                )

            if attempt < attempts:
                self._sleep(self.retry.delay)

        logger.warning(
            "Giving up on %s for %s after %s attempts", occupation_code, year, attempts
        )
        return None
