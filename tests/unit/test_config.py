"""Unit tests for settings."""

from universe.config import Settings, get_dev_settings, get_test_settings
from universe.navigation.session import default_entry_url_template


class TestSettings:
    """Tests for Settings defaults and presets."""

    def test_defaults(self, monkeypatch) -> None:
        """Test built-in defaults."""
        monkeypatch.delenv("DATA_BASE_URL", raising=False)
        monkeypatch.delenv("REFERENCE_SUFFIX", raising=False)
        s = Settings(_env_file=None)
        assert s.reference_suffix == ".json"
        assert s.reject_duplicate_ids is False
        assert s.seed_radius == 10.0
        assert s.languages == ["en", "zh"]

    def test_env_override(self, monkeypatch) -> None:
        """Test environment variables override defaults."""
        monkeypatch.setenv("REJECT_DUPLICATE_IDS", "true")
        monkeypatch.setenv("SEED_RADIUS", "25")
        s = Settings(_env_file=None)
        assert s.reject_duplicate_ids is True
        assert s.seed_radius == 25.0

    def test_presets(self) -> None:
        """Test environment presets."""
        assert get_dev_settings().log_level == "DEBUG"
        test = get_test_settings()
        assert test.default_language == "en"
        assert test.fetch_retries == 0

    def test_entry_url_template(self, monkeypatch) -> None:
        """Test local and remote entry URLs."""
        monkeypatch.setattr("universe.navigation.session.settings.data_base_url", None)
        assert default_entry_url_template() == "/data/{language}/universe.json"

        monkeypatch.setattr(
            "universe.navigation.session.settings.data_base_url", "https://example.org/data/"
        )
        assert default_entry_url_template() == "https://example.org/data/{language}/universe.json"
