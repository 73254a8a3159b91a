"""
Tests for environment-driven settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from shared.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SYNDICATION_SINK", raising=False)

        settings = Settings(_env_file=None)

        assert settings.sink == "log"
        assert settings.sink_fail_rate == 0.0
        assert settings.log_level == "INFO"
        assert settings.data_dir.name == "data"

    def test_reads_prefixed_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SYNDICATION_SINK", "memory")
        monkeypatch.setenv("SYNDICATION_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("SYNDICATION_SINK_FAIL_RATE", "0.25")

        settings = Settings(_env_file=None)

        assert settings.sink == "memory"
        assert settings.data_dir == Path(tmp_path)
        assert settings.sink_fail_rate == 0.25

    def test_rejects_unknown_sink(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sink="pager")

    def test_rejects_out_of_range_fail_rate(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sink_fail_rate=1.5)
