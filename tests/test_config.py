"""Settings 테스트"""

import pytest
from pydantic import ValidationError

from src.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for key in ("INVENTORY_MAX_WEIGHT", "MAX_EQUIPPED_ITEMS", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)
        config = Settings(_env_file=None)
        assert config.INVENTORY_MAX_WEIGHT == 1000
        assert config.MAX_EQUIPPED_ITEMS == 4
        assert config.HIGH_TIER_REQUIRED_LEVEL == 60
        assert config.RARITY_GLYPH == "★"
        assert config.LOG_LEVEL == "INFO"

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("INVENTORY_MAX_WEIGHT", "300")
        monkeypatch.setenv("MAX_EQUIPPED_ITEMS", "6")
        config = Settings(_env_file=None)
        assert config.INVENTORY_MAX_WEIGHT == 300
        assert config.MAX_EQUIPPED_ITEMS == 6

    def test_negative_capacity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, INVENTORY_MAX_WEIGHT=-1)
