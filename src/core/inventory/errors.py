"""인벤토리 연산 결과 / 실패 코드

예상 가능한 실패(용량 초과, 미발견, 슬롯 충돌 등)는 예외로 던지지 않는다.
호출자는 InventoryResult.success 또는 error를 확인한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import Item


class InventoryError(str, Enum):
    CAPACITY_EXCEEDED = "capacity_exceeded"
    ITEM_NOT_FOUND = "item_not_found"
    INVALID_ARGUMENT = "invalid_argument"
    LEVEL_TOO_LOW = "level_too_low"
    NOT_IN_INVENTORY = "not_in_inventory"
    SLOTS_FULL = "slots_full"
    SLOT_OCCUPIED = "slot_occupied"
    NOT_EQUIPPED = "not_equipped"
    SLOT_EMPTY = "slot_empty"


@dataclass(frozen=True)
class InventoryResult:
    """변경 연산 결과. 성공 시에만 truthy."""

    success: bool
    error: Optional[InventoryError] = None
    item: Optional[Item] = None
    merged: bool = False  # add_item이 기존 스택에 합쳐진 경우

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, item: Optional[Item] = None, merged: bool = False) -> InventoryResult:
        return cls(success=True, item=item, merged=merged)

    @classmethod
    def fail(cls, error: InventoryError, item: Optional[Item] = None) -> InventoryResult:
        return cls(success=False, error=error, item=item)
