from __future__ import annotations

from typing import Union


class HarvestError(Exception):
    """Base class for every error raised by the harvester."""


class TransportError(HarvestError):
    """A GET failed, returned a non-2xx status, or had an undecodable body."""

    def __init__(self, url: str, cause: Union[BaseException, str]) -> None:
        self.url = url
        self.cause = cause
        super().__init__(str(cause))


class BodyDecodeError(TransportError):
    """The response body is not valid UTF-8 text."""


class SelectorParseError(HarvestError):
    """A fixed structural pattern is malformed. Fatal at startup."""

    def __init__(self, selector: str, reason: str) -> None:
        self.selector = selector
        super().__init__(f"invalid selector {selector!r}: {reason}")


class ExtractionError(HarvestError):
    pass


class MissingFieldError(ExtractionError):
    """A well-formed detail page lacks an expected element."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Cannot find {field}")


class CrawlError(HarvestError):
    """A province listing page could not be turned into detail URLs."""

    def __init__(self, province: str, message: str) -> None:
        self.province = province
        super().__init__(f"province {province!r}: {message}")


class ListingFetchError(CrawlError):
    def __init__(self, province: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(province, f"could not load listing page ({cause})")


class ListingDecodeError(CrawlError):
    def __init__(self, province: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(province, f"listing page body is not text ({cause})")


class MissingLinkError(CrawlError):
    """A hot-city link element has no href attribute."""

    def __init__(self, province: str, element: str) -> None:
        self.element = element
        super().__init__(province, f"there is no href on {element}")


class MalformedLinkError(CrawlError):
    """A hot-city link href cannot be resolved into a URL."""

    def __init__(self, province: str, href: str, cause: BaseException) -> None:
        self.href = href
        self.cause = cause
        super().__init__(province, f"malformed href {href!r} ({cause})")
