"""검색 전략 — 순수 함수"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from .models import Item
from .sorting import KeyFunc, by_name


def binary_search(
    sorted_items: Sequence[Item],
    target: Any,
    key: KeyFunc = by_name,
) -> Optional[Item]:
    """이진 검색. 같은 key로 정렬된 시퀀스가 전제.

    일치 항목이 여럿이면 가장 왼쪽을 반환. 없으면 None.
    """
    lo, hi = 0, len(sorted_items)
    while lo < hi:
        mid = (lo + hi) // 2
        if key(sorted_items[mid]) < target:
            lo = mid + 1
        else:
            hi = mid
    if lo < len(sorted_items) and key(sorted_items[lo]) == target:
        return sorted_items[lo]
    return None


def sequential_search(
    items: Sequence[Item],
    predicate: Callable[[Item], bool],
) -> list[Item]:
    """순차 검색. 조건을 만족하는 전부를 등장 순서대로 반환."""
    return [item for item in items if predicate(item)]


def matches_criteria(item: Item, criteria: str) -> bool:
    """자유 문자열 조건: 이름 부분 일치, 또는 item_type / 재료 유형 일치."""
    return (
        criteria in item.name
        or item.item_type == criteria
        or (item.material_type is not None and item.material_type == criteria)
    )


def recursive_search(
    items: Sequence[Item],
    criteria: str,
    start: int = 0,
    end: int | None = None,
) -> Optional[Item]:
    """재귀 선형 검색. [start, end) 구간의 첫 일치 항목.

    구간을 반으로 나눠 왼쪽을 먼저 찾는다. 결과는 앞에서부터의
    선형 검색과 같고, 재귀 깊이는 log2(n) 수준이다.
    """
    if end is None:
        end = len(items)
    if start >= end:
        return None
    if end - start == 1:
        item = items[start]
        return item if matches_criteria(item, criteria) else None

    mid = (start + end) // 2
    found = recursive_search(items, criteria, start, mid)
    if found is not None:
        return found
    return recursive_search(items, criteria, mid, end)
