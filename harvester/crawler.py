from __future__ import annotations

import logging
from typing import Any, Iterator, List
from urllib.parse import urljoin, urlsplit

from .config import HOT_CITY_SELECTOR, LISTING_URL_TEMPLATE, PROVINCE_INDEX_SELECTOR, DEFAULT_TIMEOUT_SECS
from .errors import (
    BodyDecodeError,
    CrawlError,
    ListingDecodeError,
    ListingFetchError,
    MalformedLinkError,
    MissingLinkError,
    TransportError,
)
from .extractor import compile_selector, iter_link_targets
from .transport import fetch_text

logger = logging.getLogger(__name__)


class ProvinceCrawler:
    """Turns a province identifier into the detail URLs of its hot cities.

    The listing fetch is a plain blocking GET on the caller's thread; it
    does not take a permit and finishes before any of the province's
    detail tasks are dispatched.
    """

    def __init__(
        self,
        session: Any,
        listing_url_template: str = LISTING_URL_TEMPLATE,
        hot_city_selector: str = HOT_CITY_SELECTOR,
        timeout: float = DEFAULT_TIMEOUT_SECS,
    ) -> None:
        self._session = session
        self._template = listing_url_template
        self._pattern = compile_selector(hot_city_selector)
        self._timeout = timeout

    def listing_url(self, province: str) -> str:
        return self._template.format(province=province)

    def list_detail_urls(self, province: str) -> Iterator[str]:
        """Fetch the listing page now and return a lazy iterator of detail URLs.

        Raises ListingFetchError or ListingDecodeError immediately. The
        iterator raises MissingLinkError when it reaches a link element
        without an href (or an empty one) and MalformedLinkError when an
        href cannot be resolved; URLs yielded before that point stay valid.
        """
        listing_url = self.listing_url(province)
        try:
            markup = fetch_text(self._session, listing_url, self._timeout)
        except BodyDecodeError as exc:
            raise ListingDecodeError(province, exc) from exc
        except TransportError as exc:
            raise ListingFetchError(province, exc) from exc
        return self._iter_links(province, listing_url, markup)

    def _iter_links(self, province: str, listing_url: str, markup: str) -> Iterator[str]:
        for element, href in iter_link_targets(markup, self._pattern):
            if not href:
                raise MissingLinkError(province, element)
            try:
                url = urljoin(listing_url, href)
            except ValueError as exc:
                raise MalformedLinkError(province, href, exc) from exc
            yield url


def discover_provinces(
    session: Any,
    index_url: str,
    selector: str = PROVINCE_INDEX_SELECTOR,
    timeout: float = DEFAULT_TIMEOUT_SECS,
) -> List[str]:
    """Read province identifiers from the national index page.

    Each matching link's href ends in the province identifier, e.g.
    ".../weather/china/beijing". Links without an href are skipped;
    duplicates keep their first position.
    """
    pattern = compile_selector(selector)
    try:
        markup = fetch_text(session, index_url, timeout)
    except TransportError as exc:
        raise CrawlError("<index>", f"could not load index page ({exc})") from exc

    provinces: List[str] = []
    for _, href in iter_link_targets(markup, pattern):
        if not href:
            continue
        try:
            path = urlsplit(href).path
        except ValueError:
            logger.warning("skipping malformed province link %r", href)
            continue
        segments = [s for s in path.split("/") if s]
        if not segments:
            continue
        province = segments[-1]
        if province not in provinces:
            provinces.append(province)
    logger.info("discovered %d provinces from %s", len(provinces), index_url)
    return provinces
