"""
Tests for environment configuration.
"""

import logging

import pytest

from .. import config


class TestConfig:
    """Tests for config getters."""

    def test_defaults(self, monkeypatch):
        """Unset variables fall back to defaults."""
        for name in (
            "CONCENTRATION_PAIR_OPTIONS",
            "CONCENTRATION_DEFAULT_PAIRS",
            "CONCENTRATION_MISMATCH_DELAY",
            "CONCENTRATION_SESSION_MAX_AGE",
            "CONCENTRATION_LOG_LEVEL",
            "ALLOWED_ORIGINS",
        ):
            monkeypatch.delenv(name, raising=False)

        assert config.get_pair_options() == (2, 4, 6, 8)
        assert config.get_default_pairs() == 2
        assert config.get_mismatch_delay() == 1.0
        assert config.get_session_max_age() == 3600
        assert config.get_log_level() == "INFO"
        assert config.get_allowed_origins() == ["*"]

    def test_pair_options_parsed_and_sorted(self, monkeypatch):
        """Options are de-duplicated and sorted."""
        monkeypatch.setenv("CONCENTRATION_PAIR_OPTIONS", "8, 2,4,2")

        assert config.get_pair_options() == (2, 4, 8)

    def test_malformed_pair_options(self, monkeypatch, caplog):
        """Malformed options fall back with a warning."""
        monkeypatch.setenv("CONCENTRATION_PAIR_OPTIONS", "two,four")

        with caplog.at_level(logging.WARNING):
            assert config.get_pair_options() == config.DEFAULT_PAIR_OPTIONS
        assert "CONCENTRATION_PAIR_OPTIONS" in caplog.text

    def test_non_positive_pair_options(self, monkeypatch):
        """Zero is not a valid option."""
        monkeypatch.setenv("CONCENTRATION_PAIR_OPTIONS", "0,2")

        assert config.get_pair_options() == config.DEFAULT_PAIR_OPTIONS

    def test_mismatch_delay(self, monkeypatch):
        """Delay accepts fractional seconds."""
        monkeypatch.setenv("CONCENTRATION_MISMATCH_DELAY", "0.25")

        assert config.get_mismatch_delay() == 0.25

    def test_malformed_delay(self, monkeypatch):
        """Malformed or negative delay falls back."""
        monkeypatch.setenv("CONCENTRATION_MISMATCH_DELAY", "soon")
        assert config.get_mismatch_delay() == 1.0

        monkeypatch.setenv("CONCENTRATION_MISMATCH_DELAY", "-1")
        assert config.get_mismatch_delay() == 1.0

    @pytest.mark.parametrize("raw", ["inf", "nan", "-inf", "Infinity"])
    def test_non_finite_delay(self, monkeypatch, caplog, raw):
        """Non-finite delays fall back so mismatches still flip back."""
        monkeypatch.setenv("CONCENTRATION_MISMATCH_DELAY", raw)

        with caplog.at_level(logging.WARNING):
            assert config.get_mismatch_delay() == config.DEFAULT_MISMATCH_DELAY
        assert "CONCENTRATION_MISMATCH_DELAY" in caplog.text

    def test_allowed_origins(self, monkeypatch):
        """Origins are split on commas."""
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test")

        assert config.get_allowed_origins() == ["http://a.test", "http://b.test"]
