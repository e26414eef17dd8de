"""
Unit tests for settings loading.
"""

from pathlib import Path

import yaml

from deal_insights.core.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DEAL_INSIGHTS_DEALS_DIR", raising=False)
        settings = Settings(_env_file=None)
        assert settings.deals_dir == Path("data/deals")
        assert settings.batch_max_workers is None

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("DEAL_INSIGHTS_BATCH_MAX_WORKERS", "8")
        assert Settings(_env_file=None).batch_max_workers == 8

    def test_from_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEAL_INSIGHTS_DEALS_DIR", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"deals_dir": "/srv/deals", "api_port": 9000}))

        settings = Settings.from_yaml(str(path))
        assert settings.deals_dir == Path("/srv/deals")
        assert settings.api_port == 9000

    def test_environment_beats_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DEAL_INSIGHTS_API_PORT", "7000")
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"api_port": 9000}))

        assert Settings.from_yaml(str(path)).api_port == 7000

    def test_missing_yaml_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEAL_INSIGHTS_API_PORT", raising=False)
        assert Settings.from_yaml(str(tmp_path / "none.yaml")).api_port == 8000
