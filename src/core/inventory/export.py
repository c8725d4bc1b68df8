"""CSV 내보내기"""

from __future__ import annotations

import csv
import io
from typing import Sequence

from .models import Item, rarity_stars

CSV_HEADER: tuple[str, ...] = (
    "ID",
    "Name",
    "Type",
    "Rarity",
    "Weight",
    "Value",
    "Stackable",
)


def format_rarity(item: Item, glyph: str = "★", high_tier_level: int = 60) -> str:
    return glyph * rarity_stars(item, high_tier_level)


def export_to_csv(
    items: Sequence[Item],
    glyph: str = "★",
    high_tier_level: int = 60,
) -> str:
    """헤더 + 아이템당 한 줄. 순서는 입력 순서 그대로.

    Stackable은 "true"/"false". 줄바꿈은 "\\n".
    이름에 쉼표/따옴표가 있으면 csv 규칙대로 인용된다.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow(
            (
                item.item_id,
                item.name,
                item.item_type,
                format_rarity(item, glyph, high_tier_level),
                item.weight,
                item.value,
                "true" if item.stackable else "false",
            )
        )
    return buffer.getvalue()
