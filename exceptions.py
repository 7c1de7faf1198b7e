"""
Error types raised while scraping Google Scholar pages
"""
from typing import Optional


class ScholarScrapeError(Exception):
    """Base class for every scraping failure"""


class MalformedDocumentError(ScholarScrapeError):
    """The input could not be parsed into a queryable tree"""


class MissingFieldError(ScholarScrapeError):
    """A required region or node is absent from the page (layout mismatch)"""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Bad HTML: missing {field}")


class NoMatchError(ScholarScrapeError):
    """A pattern-based value could not be located in the given text"""

    def __init__(self, value: Optional[str], what: str):
        self.value = value
        self.what = what
        super().__init__(f"No {what} found in {value!r}")


class NumericConversionError(ScholarScrapeError, ValueError):
    """A matched digit run does not fit the target integer type"""

    def __init__(self, digits: str, limit: int):
        self.digits = digits
        self.limit = limit
        super().__init__(f"{digits!r} is not an integer in range 0..{limit}")
