"""이벤트 유형 상수

InventoryService가 발행하는 이벤트 목록.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # item collection
    ITEM_ADDED = "item_added"
    ITEM_MERGED = "item_merged"
    ITEM_REMOVED = "item_removed"
    INVENTORY_SORTED = "inventory_sorted"
    INVENTORY_CLEARED = "inventory_cleared"
    INVENTORY_EXPANDED = "inventory_expanded"

    # equipment binding
    ITEM_EQUIPPED = "item_equipped"
    ITEM_UNEQUIPPED = "item_unequipped"

    # failures (payload: error code)
    INVENTORY_REJECTED = "inventory_rejected"

    # persistence boundary
    INVENTORY_RESTORED = "inventory_restored"
