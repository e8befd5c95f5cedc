from __future__ import annotations

from typing import Iterator, Optional, Tuple

import soupsieve
from bs4 import BeautifulSoup

from .config import AREA_NAME_SELECTOR, TEMPERATURE_SELECTOR
from .errors import MissingFieldError, SelectorParseError
from .models import WeatherReading

_PARSER = "html.parser"


def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """Compile a CSS selector, raising SelectorParseError if it is malformed."""
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise SelectorParseError(selector, str(exc)) from exc


def parse_document(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, _PARSER)


class WeatherExtractor:
    """Pulls the area name and temperature out of a city detail page.

    Both patterns are compiled once in the constructor so a malformed
    selector fails before any page is fetched. extract() itself has no
    side effects and returns equal readings for equal markup.
    """

    def __init__(
        self,
        area_name_selector: str = AREA_NAME_SELECTOR,
        temperature_selector: str = TEMPERATURE_SELECTOR,
    ) -> None:
        self._fields: Tuple[Tuple[str, soupsieve.SoupSieve], ...] = (
            ("areaName", compile_selector(area_name_selector)),
            ("temperature", compile_selector(temperature_selector)),
        )

    def extract(self, markup: str) -> WeatherReading:
        """Return the reading found in markup or raise MissingFieldError."""
        document = parse_document(markup)
        texts = []
        for name, pattern in self._fields:
            element = pattern.select_one(document)
            if element is None:
                raise MissingFieldError(name)
            # Raw concatenation of descendant text; no stripping.
            texts.append(element.get_text())
        return WeatherReading(area_name=texts[0], temperature=texts[1])


def iter_link_targets(
    markup: str, pattern: soupsieve.SoupSieve
) -> Iterator[Tuple[str, Optional[str]]]:
    """Yield (element, href) for every element matching pattern, in document order.

    href is None when the element carries no href attribute; callers decide
    whether that is fatal.
    """
    document = parse_document(markup)
    for element in pattern.select(document):
        yield str(element), element.get("href")
