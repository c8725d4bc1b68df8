"""스냅샷 직렬화 스키마 — 저장 계층과의 경계

Core 스냅샷(dataclass)을 model_dump() 가능한 형태로 옮긴다.
값 범위 검증은 하지 않는다 (저장 계층 책임). 형태만 맞춘다.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MaterialSchema(BaseModel):
    material_type: str
    rarity: int


class EquipmentSchema(BaseModel):
    slot: str
    required_level: int = 1
    base_stats: dict[str, int] = Field(default_factory=dict)
    refinement: int = 1


class ItemSchema(BaseModel):
    """아이템 한 개"""

    item_id: int
    name: str
    item_type: str
    weight: int
    value: int
    stackable: bool = False
    kind: str = Field("basic", description="basic | material | equipment")
    material: Optional[MaterialSchema] = None
    equipment: Optional[EquipmentSchema] = None


class InventorySnapshotSchema(BaseModel):
    """인벤토리 전체 상태"""

    items: list[ItemSchema] = Field(default_factory=list)
    current_weight: int = 0
    max_weight: int
    equipped: dict[str, list[ItemSchema]] = Field(
        default_factory=dict, description="character_id → 장착 장비"
    )
