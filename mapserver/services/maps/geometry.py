"""Primitive shape geometry from the designated shapes group."""

import math
from dataclasses import asdict, dataclass

from bs4 import BeautifulSoup, Tag

SHAPE_TAGS = ("rect", "circle", "line", "path")


@dataclass(frozen=True)
class GeometryRecord:
    """Position and size of one shape element."""

    id: str | None
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def parse_number(value: str | None) -> float:
    """Parse an attribute as a float; missing, unparsable or non-finite values become 0.0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def collect_geometry(
    tree: BeautifulSoup,
    container_id: str,
    *,
    shape_tags: tuple[str, ...] = SHAPE_TAGS,
) -> list[GeometryRecord]:
    """
    Collect every shape element under the element whose id is `container_id`.

    No exclusion rules apply here. A document without the container yields an
    empty list.
    """
    container = tree.find(attrs={"id": container_id})
    if container is None:
        return []

    records: list[GeometryRecord] = []
    for element in container.find_all(list(shape_tags)):
        if not isinstance(element, Tag):
            continue
        records.append(
            GeometryRecord(
                id=element.get("id"),
                x=parse_number(element.get("x")),
                y=parse_number(element.get("y")),
                width=parse_number(element.get("width")),
                height=parse_number(element.get("height")),
            )
        )

    return records
