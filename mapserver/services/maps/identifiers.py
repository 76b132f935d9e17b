"""Extraction of user-facing element identifiers from a parsed map."""

from bs4 import BeautifulSoup, Tag

from mapserver.services.maps.exclusions import ExclusionRuleSet

# C0 controls, DEL, LINE SEPARATOR, PARAGRAPH SEPARATOR
_STRIP_TABLE = dict.fromkeys(
    [*range(0x00, 0x20), 0x7F, 0x2028, 0x2029],
    None,
)

# Whitespace trimmed from both ends after control removal: space, NBSP,
# OGHAM SPACE MARK, U+2000-U+200A, NNBSP, MMSP, IDEOGRAPHIC SPACE, BOM.
# U+0085 is not whitespace here.
_TRIM_CHARS = "".join(
    chr(c) for c in [0x20, 0xA0, 0x1680, *range(0x2000, 0x200B), 0x202F, 0x205F, 0x3000, 0xFEFF]
)


def sanitize_identifier(raw: str) -> str:
    """Drop U+0000-U+001F, U+007F, U+2028 and U+2029, then trim `_TRIM_CHARS`.

    Other invisible characters (e.g. U+200B, U+0085) are kept.
    """
    return raw.translate(_STRIP_TABLE).strip(_TRIM_CHARS)


def extract_identifiers(
    tree: BeautifulSoup,
    rules: ExclusionRuleSet,
    *,
    tag: str = "path",
    container_tag: str = "g",
) -> list[str]:
    """
    Collect the ids of `tag` elements nested (at any depth) inside a `container_tag`.

    Ids are sanitized before the exclusion rules are applied. Survivors keep
    document order; duplicates are not removed.

    Args:
        tree: Parsed SVG document
        rules: Identifiers to suppress
        tag: Element type carrying interactive shape labels
        container_tag: Grouping element the shapes must live under

    Returns:
        Sanitized identifiers that passed the exclusion rules
    """
    identifiers: list[str] = []

    for element in tree.find_all(tag):
        if not isinstance(element, Tag):
            continue

        raw_id = element.get("id")
        if raw_id is None:
            continue

        if element.find_parent(container_tag) is None:
            continue

        identifier = sanitize_identifier(raw_id)
        if rules.is_excluded(identifier):
            continue

        identifiers.append(identifier)

    return identifiers
