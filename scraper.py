"""
Google Scholar page scrapers for search-result and citation pages
"""
import sys
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup

from exceptions import MalformedDocumentError, MissingFieldError, ScholarScrapeError
from extractor import PaperExtractor
from models import Paper


class SearchDocument:
    """A parsed Google Scholar search-results page"""

    RESULTS_SELECTOR = "#gs_res_ccl_mid .gs_ri"
    DEFAULT_PARSER = "html.parser"

    def __init__(self, soup: BeautifulSoup, verbose: bool = False):
        self.soup = soup
        self.verbose = verbose

    @classmethod
    def from_bytes_or_stream(cls, source, parser: Optional[str] = None, verbose: bool = False):
        """
        Parse raw HTML into a document

        Args:
            source: HTML as bytes, str, or a readable stream
            parser: BeautifulSoup tree builder (default: html.parser)
            verbose: Print progress messages

        Raises:
            MalformedDocumentError: if no tree can be built from the input
        """
        markup = _read_markup(source)
        soup = _parse_html(markup, parser or cls.DEFAULT_PARSER)
        document = cls(soup, verbose=verbose)
        document._log(f"Parsed document of length {len(markup)} with {parser or cls.DEFAULT_PARSER}", "DEBUG")
        return document

    @classmethod
    def from_file(cls, path: Union[str, Path], parser: Optional[str] = None, verbose: bool = False):
        """Parse a saved page from disk"""
        return cls.from_bytes_or_stream(Path(path).read_bytes(), parser=parser, verbose=verbose)

    def _log(self, message: str, level: str = "INFO"):
        """Log message if verbose mode is enabled"""
        if self.verbose:
            prefix = {
                "INFO": "ℹ️",
                "DEBUG": "🔍",
                "WARN": "⚠️",
                "ERROR": "❌",
                "SUCCESS": "✓"
            }.get(level, "•")
            print(f"{prefix} {message}", file=sys.stderr)

    def scrape_papers(self) -> List[Paper]:
        """
        Scrape every paper summary on the page, in rank order

        Page format:

            <div id="gs_res_ccl_mid">
              <div class="gs_ri">
                paper
              </div>
              ...
            </div>

        A single block that cannot be extracted aborts the whole call.
        """
        nodes = self.soup.select(self.RESULTS_SELECTOR)
        self._log(f"Found {len(nodes)} result blocks", "DEBUG")

        papers: List[Paper] = []
        for idx, node in enumerate(nodes, start=1):
            try:
                papers.append(PaperExtractor.extract_paper(node))
            except ScholarScrapeError as e:
                self._log(f"Result block {idx} could not be extracted: {e}", "ERROR")
                raise

        self._log(f"Scraped {len(papers)} papers", "SUCCESS")
        return papers


class CitationDocument:
    """
    A parsed "Cited by" page: the target paper plus the papers citing it.

    Wraps a SearchDocument and forwards everything else to it, so the citer
    list is available through `scrape_papers()`.
    """

    HEADER_ID = "gs_rt_hdr"
    HEADER_SELECTOR = f"#{HEADER_ID} > h2"

    def __init__(self, soup: BeautifulSoup, verbose: bool = False):
        self._search = SearchDocument(soup, verbose=verbose)

    @classmethod
    def from_bytes_or_stream(cls, source, parser: Optional[str] = None, verbose: bool = False):
        """Parse raw HTML (bytes, str or stream) into a citation document"""
        search = SearchDocument.from_bytes_or_stream(source, parser=parser, verbose=verbose)
        return cls(search.soup, verbose=verbose)

    @classmethod
    def from_file(cls, path: Union[str, Path], parser: Optional[str] = None, verbose: bool = False):
        """Parse a saved citation page from disk"""
        return cls.from_bytes_or_stream(Path(path).read_bytes(), parser=parser, verbose=verbose)

    def __getattr__(self, name):
        if name == "_search":
            raise AttributeError(name)
        return getattr(self._search, name)

    def scrape_target_paper(self) -> Paper:
        """
        Scrape the paper whose citers are listed

        Header format:

            <div id="gs_rt_hdr">
              <h2>
                <a href="/scholar?cluster=000000">Title of paper</a>
              </h2>
            </div>
        """
        if self.soup.find(id=self.HEADER_ID) is None:
            raise MissingFieldError("header")

        node = None
        for heading in self.soup.select(self.HEADER_SELECTOR):
            node = _first_link_or_text(heading)
            if node is not None:
                break
        if node is None:
            raise MissingFieldError("header title")

        href = node.get('href') if isinstance(node, Tag) else None
        if not href:
            raise MissingFieldError("header link", "Bad HTML: target paper title is not a link")

        paper = Paper(
            title=node.get_text(),
            id=PaperExtractor.parse_id_from_url(href),
            citation_count=None,
            citers=None,
        )
        self._log(f"Target paper: {paper.title} ({paper.id})", "DEBUG")
        return paper

    def scrape_target_paper_with_citers(self) -> Paper:
        """Scrape the target paper and attach the citer list"""
        target_paper = self.scrape_target_paper()
        citers = self.scrape_papers()
        return target_paper.model_copy(update={'citers': tuple(citers)})


def _first_link_or_text(parent: Tag) -> Optional[Union[Tag, NavigableString]]:
    """First direct child that is an <a> element or non-blank text"""
    for child in parent.children:
        if isinstance(child, Tag):
            if child.name == "a":
                return child
        elif isinstance(child, NavigableString) and not isinstance(child, Comment):
            if child.strip():
                return child
    return None


def _read_markup(source) -> Union[str, bytes]:
    if hasattr(source, "read"):
        source = source.read()
    if not isinstance(source, (str, bytes)):
        raise MalformedDocumentError(f"Expected HTML bytes or text, got {type(source).__name__}")
    return source


def _parse_html(markup: Union[str, bytes], parser: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(markup, parser)
    except ParserRejectedMarkup as exc:
        raise MalformedDocumentError(f"Could not parse HTML: {exc}") from exc
