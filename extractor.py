"""
Field extraction utilities for Google Scholar result blocks
"""
import re
from typing import Optional, Tuple

from bs4 import Comment, NavigableString, Tag

from exceptions import MissingFieldError, NoMatchError, NumericConversionError
from models import Paper, U32_MAX, U64_MAX

# Compiled once, shared read-only by every document
CLUSTER_ID_PATTERN = re.compile(r'(cluster|cites)=(\d+)')
CITATION_COUNT_PATTERN = re.compile(r'[^\d]+(\d+)')


class PaperExtractor:
    """Utility class for turning one result block into a Paper"""

    TITLE_CLASS = "gs_rt"
    FOOTER_CLASS = "gs_fl"
    LABEL_TAG = "span"

    @staticmethod
    def extract_paper(node: Tag) -> Paper:
        """Build a Paper from one `.gs_ri` block; id/citation errors propagate"""
        title = PaperExtractor.scrape_title(node)
        paper_id, citation_count = PaperExtractor.scrape_id_and_citation(node)
        return Paper(
            title=title,
            id=paper_id,
            citation_count=citation_count,
            citers=None,
        )

    @staticmethod
    def scrape_title(node: Tag) -> str:
        """
        Extract the title of a result block. Never fails.

        There are (at least) two formats:

        1. Link to a paper or something:

            <h3 class="gs_rt">
              <span>[BOOK]</span>
              <a href="http://paper.pdf">Title of paper</a>
            </h3>

        2. Not a link:

            <h3 class="gs_rt">
              <span>[CITATION]</span>
              Title of paper
            </h3>

        The label span may be missing in both.
        """
        link = node.select_one(f".{PaperExtractor.TITLE_CLASS} > a")
        if link is not None:
            return link.get_text()

        parts = []
        for container in node.select(f".{PaperExtractor.TITLE_CLASS}"):
            for child in container.children:
                if isinstance(child, Tag):
                    if child.name == PaperExtractor.LABEL_TAG:
                        continue
                    parts.append(child.get_text())
                elif isinstance(child, NavigableString) and not isinstance(child, Comment):
                    parts.append(str(child))
        return "".join(parts).strip()

    @staticmethod
    def scrape_id_and_citation(node: Tag) -> Tuple[int, int]:
        """
        Scrape the footer of a result block for the cluster id and citation count.

        Footer format:

            <div class="gs_fl">
              (something)
              <a href="/scholar?cites=000000">Cited by 999</a>
              (something)
            </div>

        Only the "Cited by" link encodes the id in this form, so the first
        child with a parseable href is taken.
        """
        footer = node.select_one(f".{PaperExtractor.FOOTER_CLASS}")
        if footer is None:
            raise MissingFieldError("footer")

        citation_node = next(
            (
                child for child in footer.children
                if isinstance(child, Tag) and PaperExtractor._has_cluster_id(child.get('href'))
            ),
            None,
        )
        if citation_node is None:
            raise MissingFieldError("citation link")

        paper_id = PaperExtractor.parse_id_from_url(citation_node.get('href'))
        citation_count = PaperExtractor.parse_citation_count(citation_node.get_text())
        return paper_id, citation_count

    @staticmethod
    def _has_cluster_id(href: Optional[str]) -> bool:
        if not href:
            return False
        try:
            PaperExtractor.parse_id_from_url(href)
        except (NoMatchError, NumericConversionError):
            return False
        return True

    @staticmethod
    def parse_id_from_url(url: Optional[str]) -> int:
        """Extract the cluster id from a `cluster=<digits>` or `cites=<digits>` URL"""
        match = CLUSTER_ID_PATTERN.search(url or "")
        if not match:
            raise NoMatchError(url, "cluster id")
        return PaperExtractor._to_unsigned(match.group(2), U64_MAX)

    @staticmethod
    def parse_citation_count(text: Optional[str]) -> int:
        """Extract the count from a label like "Cited by 12", in any language"""
        match = CITATION_COUNT_PATTERN.search(text or "")
        if not match:
            raise NoMatchError(text, "citation count")
        return PaperExtractor._to_unsigned(match.group(1), U32_MAX)

    @staticmethod
    def _to_unsigned(digits: str, limit: int) -> int:
        # `\d` also matches non-ASCII decimal digits; only 0-9 convert
        if not digits.isascii():
            raise NumericConversionError(digits, limit)
        try:
            value = int(digits)
        except ValueError as exc:
            raise NumericConversionError(digits, limit) from exc
        if value < 0 or value > limit:
            raise NumericConversionError(digits, limit)
        return value
