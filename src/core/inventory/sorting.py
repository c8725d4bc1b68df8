"""정렬 전략 — 순수 함수

네 알고리즘 모두:
- 입력 시퀀스를 변경하지 않고 새 list를 반환
- 안정 정렬 (키가 같으면 원래 상대 순서 유지)
- 같은 입력/키에 대해 동일한 결과
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Sequence, TypeVar

from .models import Item, rarity_stars

logger = logging.getLogger(__name__)

T = TypeVar("T")
KeyFunc = Callable[[Any], Any]
SortFunc = Callable[[Sequence[T], KeyFunc], list[T]]


def selection_sort(items: Sequence[T], key: KeyFunc) -> list[T]:
    """선택 정렬. 최솟값을 swap 대신 회전 삽입해서 안정성을 유지."""
    result = list(items)
    n = len(result)
    for i in range(n):
        min_idx = i
        min_key = key(result[i])
        for j in range(i + 1, n):
            k = key(result[j])
            if k < min_key:
                min_idx, min_key = j, k
        if min_idx != i:
            result.insert(i, result.pop(min_idx))
    return result


def insertion_sort(items: Sequence[T], key: KeyFunc) -> list[T]:
    """삽입 정렬."""
    result = list(items)
    for i in range(1, len(result)):
        current = result[i]
        current_key = key(current)
        j = i - 1
        while j >= 0 and key(result[j]) > current_key:
            result[j + 1] = result[j]
            j -= 1
        result[j + 1] = current
    return result


def bubble_sort(items: Sequence[T], key: KeyFunc) -> list[T]:
    """버블 정렬. 한 패스에서 교환이 없으면 종료."""
    result = list(items)
    n = len(result)
    for end in range(n - 1, 0, -1):
        swapped = False
        for j in range(end):
            if key(result[j]) > key(result[j + 1]):
                result[j], result[j + 1] = result[j + 1], result[j]
                swapped = True
        if not swapped:
            break
    return result


def merge_sort(items: Sequence[T], key: KeyFunc) -> list[T]:
    """병합 정렬. 동률이면 왼쪽을 먼저 취한다."""
    if len(items) <= 1:
        return list(items)
    mid = len(items) // 2
    left = merge_sort(items[:mid], key)
    right = merge_sort(items[mid:], key)

    merged: list[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if key(left[i]) <= key(right[j]):
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


# ── 키 → 알고리즘 고정 매핑 ─────────────────────────────────────


class SortKey(str, Enum):
    RARITY = "rarity"
    TYPE = "type"
    NAME = "name"
    ADVANCED = "advanced"


def by_name(item: Item) -> str:
    return item.name


def by_type(item: Item) -> str:
    return item.item_type


SORT_ALGORITHMS: dict[SortKey, SortFunc] = {
    SortKey.RARITY: selection_sort,
    SortKey.TYPE: bubble_sort,
    SortKey.NAME: insertion_sort,
    SortKey.ADVANCED: merge_sort,
}


def sort_key_func(sort_key: SortKey, high_tier_level: int = 60) -> KeyFunc:
    """정렬 키 함수. rarity는 높은 등급이 먼저 오도록 부호 반전."""
    if sort_key == SortKey.RARITY:
        return lambda item: -rarity_stars(item, high_tier_level)
    if sort_key == SortKey.TYPE:
        return by_type
    return by_name


def sort_items(
    items: Sequence[Item],
    sort_key: SortKey | str,
    high_tier_level: int = 60,
) -> list[Item]:
    """sort_key에 매핑된 알고리즘으로 정렬한 새 list 반환.

    알 수 없는 키는 ValueError.
    """
    sort_key = SortKey(sort_key)
    algorithm = SORT_ALGORITHMS[sort_key]
    logger.debug(
        "Sorting %d items by %s (%s)", len(items), sort_key.value, algorithm.__name__
    )
    return algorithm(items, sort_key_func(sort_key, high_tier_level))
