"""Tests for the unified config loader."""

from pathlib import Path

import pytest

from vidcarve.config.loader import (
    DEFAULT_TIMEOUT,
    ConfigSource,
    VidcarveConfig,
    _find_project_config,
    _get_user_config_path,
    _load_yaml_config,
    _resolve_config,
    _values_from_yaml,
    clear_config_cache,
    get_config,
)
from vidcarve.exceptions import ConfigError


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_config_source_values(self):
        assert ConfigSource.ENV.value == "env"
        assert ConfigSource.PROJECT.value == "project"
        assert ConfigSource.USER.value == "user"
        assert ConfigSource.DEFAULT.value == "default"


class TestVidcarveConfig:
    """Tests for VidcarveConfig dataclass."""

    def test_defaults(self):
        config = VidcarveConfig(root_dir=Path("/tmp/root"))
        assert config.trash_words == ()
        assert config.proxy_url is None
        assert config.url_placeholder == ".xx"
        assert config.request_timeout == DEFAULT_TIMEOUT
        assert config.source is ConfigSource.DEFAULT

    def test_config_repr(self):
        config = VidcarveConfig(root_dir=Path("/tmp/root"), source=ConfigSource.USER)
        repr_str = repr(config)
        assert "root_dir=" in repr_str
        assert "source='user'" in repr_str

    def test_config_is_frozen(self):
        config = VidcarveConfig(root_dir=Path("/tmp/root"))
        with pytest.raises(AttributeError):
            config.proxy_url = "x"  # type: ignore

    def test_defaults_uses_root_env(self, tmp_path):
        assert VidcarveConfig.defaults().root_dir == (tmp_path / "root").resolve()


class TestLoadYamlConfig:
    """Tests for _load_yaml_config()."""

    def test_missing_file(self, tmp_path):
        assert _load_yaml_config(tmp_path / "nope.yaml") is None

    def test_valid_file(self, tmp_path):
        path = _write(tmp_path / "c.yaml", "proxy_url: https://p/?u=\n")
        assert _load_yaml_config(path) == {"proxy_url": "https://p/?u="}

    def test_empty_file(self, tmp_path):
        assert _load_yaml_config(_write(tmp_path / "c.yaml", "")) == {}

    def test_invalid_yaml(self, tmp_path):
        assert _load_yaml_config(_write(tmp_path / "c.yaml", "a: [unclosed\n")) is None

    def test_non_dict(self, tmp_path):
        assert _load_yaml_config(_write(tmp_path / "c.yaml", "- a\n- b\n")) is None


class TestValuesFromYaml:
    """Tests for _values_from_yaml()."""

    def test_picks_known_keys(self):
        values = _values_from_yaml(
            {
                "trash_words": ["JUNK"],
                "proxy_url": "https://p/?u=",
                "url_placeholder": ".yy",
                "request_timeout": 5,
                "unrelated": True,
            },
            Path("c.yaml"),
        )
        assert values == {
            "trash_words": ("JUNK",),
            "proxy_url": "https://p/?u=",
            "url_placeholder": ".yy",
            "request_timeout": 5.0,
        }

    @pytest.mark.parametrize(
        "config",
        [
            {"trash_words": "JUNK"},
            {"trash_words": [1, 2]},
            {"proxy_url": 42},
            {"url_placeholder": ["x"]},
            {"request_timeout": "soon"},
        ],
    )
    def test_wrong_types_raise(self, config):
        with pytest.raises(ConfigError) as exc_info:
            _values_from_yaml(config, Path("c.yaml"))
        assert exc_info.value.category == "config"


class TestResolveConfig:
    """Tests for _resolve_config() priority order."""

    def test_defaults_when_nothing_configured(self):
        config = _resolve_config()
        assert config.source is ConfigSource.DEFAULT
        assert config.config_path is None

    def test_user_config(self):
        path = _write(_get_user_config_path(), "trash_words: [JUNK]\n")
        config = _resolve_config()
        assert config.source is ConfigSource.USER
        assert config.trash_words == ("JUNK",)
        assert config.config_path == path

    def test_project_beats_user(self, tmp_path):
        _write(_get_user_config_path(), "proxy_url: https://user/?u=\n")
        _write(tmp_path / ".vidcarve" / "config.yaml", "proxy_url: https://project/?u=\n")
        config = _resolve_config()
        assert config.source is ConfigSource.PROJECT
        assert config.proxy_url == "https://project/?u="

    def test_unparseable_project_falls_back_to_user(self, tmp_path):
        _write(_get_user_config_path(), "proxy_url: https://user/?u=\n")
        _write(tmp_path / ".vidcarve" / "config.yaml", "a: [unclosed\n")
        assert _resolve_config().proxy_url == "https://user/?u="

    def test_env_overrides_files(self, monkeypatch):
        _write(_get_user_config_path(), "proxy_url: https://user/?u=\ntrash_words: [JUNK]\n")
        monkeypatch.setenv("VIDCARVE_PROXY_URL", "https://env/?u=")
        monkeypatch.setenv("VIDCARVE_TIMEOUT", "7.5")
        config = _resolve_config()
        assert config.source is ConfigSource.ENV
        assert config.proxy_url == "https://env/?u="
        assert config.request_timeout == 7.5
        assert config.trash_words == ("JUNK",)

    def test_non_numeric_timeout_ignored(self, monkeypatch):
        monkeypatch.setenv("VIDCARVE_TIMEOUT", "soon")
        config = _resolve_config()
        assert config.request_timeout == DEFAULT_TIMEOUT
        assert config.source is ConfigSource.DEFAULT


class TestFindProjectConfig:
    def test_walks_up_from_cwd(self, tmp_path, monkeypatch):
        path = _write(tmp_path / ".vidcarve" / "config.yaml", "{}\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert _find_project_config() == path.resolve()


class TestGetConfig:
    def test_cached_until_cleared(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("VIDCARVE_PROXY_URL", "https://env/?u=")
        assert get_config() is first
        clear_config_cache()
        assert get_config().proxy_url == "https://env/?u="
