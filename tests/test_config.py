"""Tests for TOML configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from liftpack.config import CONFIG_ENV, LiftpackConfig, load_config, resolve_config_path


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """No env var, no ./liftpack.toml and no ~/liftpack.toml."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


class TestResolveConfigPath:
    def test_nothing_found(self) -> None:
        assert resolve_config_path() is None

    def test_current_directory(self, isolated: Path) -> None:
        (isolated / "liftpack.toml").write_text("")
        assert resolve_config_path() == Path("liftpack.toml")

    def test_explicit_missing(self, isolated: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            resolve_config_path(isolated / "other.toml")

    def test_env_wins(self, isolated: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = isolated / "env.toml"
        env_file.write_text("")
        explicit = isolated / "explicit.toml"
        explicit.write_text("")
        monkeypatch.setenv(CONFIG_ENV, str(env_file))
        assert resolve_config_path(explicit) == env_file


class TestLoadConfig:
    def test_defaults(self) -> None:
        config = load_config()
        assert config == LiftpackConfig()
        assert config.experiment.samples == 512
        assert config.experiment.field == "close"
        assert config.packet.wavelet == "line"
        assert config.packet.cost == "width"
        assert "ibm" in config.experiment.symbols

    def test_file_values(self, isolated: Path) -> None:
        path = isolated / "custom.toml"
        path.write_text(
            '[experiment]\n'
            'data_dir = "prices"\n'
            'symbols = ["aa"]\n'
            'samples = 256\n'
            'field = "Open"\n'
            'quantizer = "round3"\n'
            '\n'
            '[packet]\n'
            'wavelet = "ts"\n'
            'cost = "threshold"\n'
            'threshold = 2.5\n'
        )
        config = load_config(path)
        assert config.experiment.data_dir == Path("prices")
        assert config.experiment.symbols == ["aa"]
        assert config.experiment.samples == 256
        assert config.experiment.field == "open"
        assert config.experiment.quantizer == "round3"
        assert config.packet.wavelet == "ts"
        assert config.packet.threshold == 2.5
        assert config.packet.arena_block_bytes == 1 << 20

    @pytest.mark.parametrize(
        "body",
        [
            "[experiment]\nsamples = 500\n",
            "[experiment]\nfield = \"adjclose\"\n",
            "[packet]\nwavelet = \"daub4\"\n",
            "[packet]\ncost = \"entropy\"\n",
            "[packet]\nthreshold = -1.0\n",
        ],
    )
    def test_invalid_values(self, isolated: Path, body: str) -> None:
        path = isolated / "bad.toml"
        path.write_text(body)
        with pytest.raises(ValidationError):
            load_config(path)
