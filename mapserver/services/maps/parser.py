"""SVG markup parsing."""

import logging

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from lxml import etree

from mapserver.exceptions import MapParseError

logger = logging.getLogger(__name__)


def parse_document(svg_text: str) -> BeautifulSoup:
    """
    Parse SVG markup into a navigable element tree.

    Uses the lxml XML tree builder, so tag and attribute names are
    case-sensitive. lxml recovers from minor malformations; input with no
    recoverable root element is rejected.

    Raises:
        MapParseError: if the markup cannot be parsed into an element tree
    """
    try:
        soup = BeautifulSoup(svg_text, "xml")
    except (ParserRejectedMarkup, etree.LxmlError, ValueError) as e:
        raise MapParseError(f"SVG parsing failed: {e}") from e

    if soup.find() is None:
        logger.warning(f"Rejected SVG markup without a root element ({len(svg_text)} chars)")
        raise MapParseError("SVG document has no root element")

    return soup
