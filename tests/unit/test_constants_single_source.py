"""Test that tunable constants are accessible from Settings and not duplicated."""

import pytest

from backend.app.config import Settings, get_settings


def test_settings_accessible() -> None:
    """Test that Settings can be imported and accessed."""
    settings = get_settings()
    assert settings is not None
    assert get_settings() is settings


def test_llm_constants_accessible() -> None:
    """Test that LLM constants are accessible."""
    settings = get_settings()
    assert settings.openai_model
    assert settings.llm_timeout_s > 0


def test_fallback_constants_accessible() -> None:
    """Test that fallback generator constants are accessible."""
    settings = get_settings()
    assert settings.fallback_transport_cost_cents >= 0
    assert isinstance(settings.fallback_rng_seed, int)


def test_schedule_constants_accessible() -> None:
    """Test that scheduling constants are accessible."""
    settings = get_settings()
    assert 0 <= settings.day_start_hour < 24
    assert settings.activity_buffer_min >= 0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that environment variables override defaults."""
    monkeypatch.setenv("DAY_START_HOUR", "8")
    monkeypatch.setenv("FALLBACK_TRANSPORT_COST_CENTS", "2500")

    settings = Settings()

    assert settings.day_start_hour == 8
    assert settings.fallback_transport_cost_cents == 2500
