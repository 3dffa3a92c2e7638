"""Tests for environment-driven configuration."""

from tictactoe.config import Config


class TestConfig:
    """Tests for Config environment names."""

    def test_defaults(self, monkeypatch):
        for name in ("DB_DIR", "PORT", "TICTACTOE_DATA_DIR", "TICTACTOE_PORT"):
            monkeypatch.delenv(name, raising=False)
        config = Config(_env_file=None)
        assert config.data_dir == "."
        assert config.port == 3000

    def test_legacy_names(self, monkeypatch):
        """Test that DB_DIR and PORT are honoured for existing deployments."""
        monkeypatch.delenv("TICTACTOE_DATA_DIR", raising=False)
        monkeypatch.delenv("TICTACTOE_PORT", raising=False)
        monkeypatch.setenv("DB_DIR", "/srv/tictactoe")
        monkeypatch.setenv("PORT", "8080")
        config = Config(_env_file=None)
        assert config.data_dir == "/srv/tictactoe"
        assert config.port == 8080

    def test_prefixed_names_win(self, monkeypatch):
        """Test that prefixed names take precedence over the legacy ones."""
        monkeypatch.setenv("DB_DIR", "/srv/legacy")
        monkeypatch.setenv("TICTACTOE_DATA_DIR", "/srv/current")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("TICTACTOE_PORT", "9090")
        config = Config(_env_file=None)
        assert config.data_dir == "/srv/current"
        assert config.port == 9090

    def test_init_by_field_name(self, monkeypatch):
        monkeypatch.delenv("DB_DIR", raising=False)
        monkeypatch.delenv("TICTACTOE_DATA_DIR", raising=False)
        config = Config(_env_file=None, data_dir="/tmp/data")
        assert config.data_dir == "/tmp/data"
