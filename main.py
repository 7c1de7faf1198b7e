"""
Main entry point for the Google Scholar page scraper
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from exceptions import ScholarScrapeError
from scraper import CitationDocument, SearchDocument

MODES = ('search', 'target', 'citations')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Extract papers from saved Google Scholar pages as JSON',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
  python main.py search quantum_theory.html
  python main.py target quantum_theory_citations.html
  python main.py citations quantum_theory_citations.html --output citers.json
  curl -s "$URL" | python main.py search -
        """
    )

    parser.add_argument(
        'mode',
        choices=MODES,
        help='search: result list; target: paper of a citation page; citations: target paper with its citers'
    )

    parser.add_argument(
        'html_file',
        type=str,
        help='Saved Google Scholar page, or - to read standard input'
    )

    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Write JSON to this file instead of standard output'
    )

    parser.add_argument(
        '--parser',
        type=str,
        default=SearchDocument.DEFAULT_PARSER,
        help='BeautifulSoup tree builder (default: html.parser)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose debug logging (default: off)'
    )

    return parser


def _read_source(html_file: str) -> bytes:
    if html_file == '-':
        return sys.stdin.buffer.read()
    return Path(html_file).read_bytes()


def run(mode: str, source: bytes, parser: str, verbose: bool):
    """Scrape `source` according to `mode` and return a JSON-ready payload"""
    if mode == 'search':
        document = SearchDocument.from_bytes_or_stream(source, parser=parser, verbose=verbose)
        return [paper.to_dict() for paper in document.scrape_papers()]

    document = CitationDocument.from_bytes_or_stream(source, parser=parser, verbose=verbose)
    if mode == 'target':
        return document.scrape_target_paper().to_dict()
    return document.scrape_target_paper_with_citers().to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to orchestrate scraping and JSON output"""
    args = build_parser().parse_args(argv)

    print("=" * 60, file=sys.stderr)
    print("Google Scholar Page Scraper", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Mode: {args.mode}", file=sys.stderr)
    print(f"Input: {args.html_file}", file=sys.stderr)
    print(f"Output: {args.output or 'stdout'}", file=sys.stderr)
    print("=" * 60, file=sys.stderr)

    try:
        source = _read_source(args.html_file)
        payload = run(args.mode, source, args.parser, args.verbose)
    except KeyboardInterrupt:
        print("\nScraping interrupted by user.", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"\nError: could not read {args.html_file}: {e}", file=sys.stderr)
        return 1
    except ScholarScrapeError as e:
        print(f"\nError: {e}", file=sys.stderr)
        print("Check that the page is a Google Scholar page of the requested kind.", file=sys.stderr)
        return 1

    content = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        output_path = Path(args.output)
        if not output_path.parent.exists():
            output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding='utf-8')
        print(f"\n✓ JSON saved to: {output_path.absolute()}", file=sys.stderr)
    else:
        print(content)

    if isinstance(payload, list):
        print(f"Total Papers: {len(payload)}", file=sys.stderr)
    else:
        print(f"Target Paper: {payload['title']}", file=sys.stderr)
        if 'citers' in payload:
            print(f"Citers: {len(payload['citers'])}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
