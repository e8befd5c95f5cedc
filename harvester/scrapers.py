from __future__ import annotations

from typing import Any

from .base import BaseScraper
from .config import DEFAULT_TIMEOUT_SECS
from .extractor import WeatherExtractor
from .models import WeatherReading
from .transport import fetch_text


class WeatherDetailScraper(BaseScraper):
    """Fetches one city detail page over the shared session and extracts its reading."""

    def __init__(
        self,
        session: Any,
        extractor: WeatherExtractor,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._session = session
        self._extractor = extractor
        self._timeout = timeout

    def fetch(self, url: str) -> str:
        return fetch_text(self._session, url, self._timeout)

    def parse(self, response: Any) -> WeatherReading:
        return self._extractor.extract(response)
