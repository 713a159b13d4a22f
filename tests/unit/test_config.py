import pytest
from pydantic import ValidationError

from wasteland.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.map_radius == 40
    assert settings.map_seed is None
    assert settings.visibility_range == 2
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WASTELAND_MAP_RADIUS", "12")
    monkeypatch.setenv("WASTELAND_MAP_SEED", "77")
    settings = Settings(_env_file=None)
    assert settings.map_radius == 12
    assert settings.map_seed == 77


def test_radius_is_capped_at_token_width():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, map_radius=100)
