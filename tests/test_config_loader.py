"""Tests for configuration loading and merging."""

from __future__ import annotations

import argparse
import json
import logging

import pytest

from sitesync.exceptions import ConfigError
from sitesync.utils.config_loader import DEFAULT_CONFIG, ConfigLoader, load_config


def _args(**overrides) -> argparse.Namespace:
    values = {
        "source": None,
        "bucket": None,
        "profile": None,
        "region": None,
        "endpoint_url": None,
        "workers": None,
        "ignore": None,
        "honor_ignore": False,
        "dry_run": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestLoadConfigJson:
    def test_defaults_without_file(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = ConfigLoader.load_config_json()
        assert config == DEFAULT_CONFIG
        config["ignore"].append("x")
        assert DEFAULT_CONFIG["ignore"] == []

    def test_reads_default_file_from_cwd(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "sitesync.json").write_text(
            json.dumps({"bucket_name": "example.com", "source_dir": "public/"})
        )
        config = ConfigLoader.load_config_json()
        assert config["bucket_name"] == "example.com"
        assert config["source_dir"] == "public/"
        assert config["max_workers"] == DEFAULT_CONFIG["max_workers"]

    def test_explicit_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            ConfigLoader.load_config_json(str(tmp_path / "nope.json"))

    def test_invalid_json_raises(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Error loading"):
            ConfigLoader.load_config_json(str(path))

    def test_non_object_raises(self, tmp_path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            ConfigLoader.load_config_json(str(path))

    def test_unknown_keys_are_warned_and_dropped(self, tmp_path, caplog) -> None:
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"bucket_name": "b", "colour": "blue"}))
        with caplog.at_level(logging.WARNING, logger="sitesync"):
            config = ConfigLoader.load_config_json(str(path))
        assert "colour" not in config
        assert "Unknown config key 'colour'" in caplog.text


class TestOverrides:
    def test_environment(self) -> None:
        config = dict(DEFAULT_CONFIG)
        ConfigLoader.apply_env_overrides(
            config, {"SITESYNC_BUCKET": "env-bucket", "AWS_REGION": "eu-west-1", "AWS_PROFILE": " "}
        )
        assert config["bucket_name"] == "env-bucket"
        assert config["aws_region"] == "eu-west-1"
        assert config["aws_profile"] == ""

    def test_flags_win_and_extend_ignore(self) -> None:
        config = dict(DEFAULT_CONFIG, bucket_name="file-bucket", ignore=["a"])
        ConfigLoader.apply_cli_overrides(
            config, _args(bucket="flag-bucket", workers=2, ignore=["b"], dry_run=True)
        )
        assert config["bucket_name"] == "flag-bucket"
        assert config["max_workers"] == 2
        assert config["ignore"] == ["a", "b"]
        assert config["dry_run"] is True
        assert config["honor_ignore"] is False

    def test_load_config_precedence(self, tmp_path) -> None:
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"bucket_name": "file", "source_dir": "file/"}))
        config = load_config(
            str(path), _args(source="flag/"), environ={"SITESYNC_BUCKET": "env"}
        )
        assert config["bucket_name"] == "env"
        assert config["source_dir"] == "flag/"


class TestValidate:
    def test_bucket_required(self) -> None:
        with pytest.raises(ConfigError, match="bucket"):
            ConfigLoader.validate(dict(DEFAULT_CONFIG))

    @pytest.mark.parametrize("workers", [0, -1, "4", True, None])
    def test_workers_must_be_positive_int(self, workers) -> None:
        config = dict(DEFAULT_CONFIG, bucket_name="b", max_workers=workers)
        with pytest.raises(ConfigError, match="max_workers"):
            ConfigLoader.validate(config)

    @pytest.mark.parametrize("key", ["dry_run", "honor_ignore"])
    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
    def test_flags_must_be_real_booleans(self, key, value) -> None:
        config = dict(DEFAULT_CONFIG, bucket_name="b", **{key: value})
        with pytest.raises(ConfigError, match=key):
            ConfigLoader.validate(config)

    @pytest.mark.parametrize("value", [0, -3, "3", 2.5, False])
    def test_max_attempts_must_be_positive_int(self, value) -> None:
        config = dict(DEFAULT_CONFIG, bucket_name="b", max_attempts=value)
        with pytest.raises(ConfigError, match="max_attempts"):
            ConfigLoader.validate(config)

    @pytest.mark.parametrize("key", ["connect_timeout", "read_timeout"])
    @pytest.mark.parametrize("value", [0, -1.5, "10", None, True])
    def test_timeouts_must_be_positive_numbers(self, key, value) -> None:
        config = dict(DEFAULT_CONFIG, bucket_name="b", **{key: value})
        with pytest.raises(ConfigError, match=key):
            ConfigLoader.validate(config)

    def test_fractional_timeout_is_accepted(self) -> None:
        config = dict(DEFAULT_CONFIG, bucket_name="b", read_timeout=2.5)
        assert ConfigLoader.validate(config)["read_timeout"] == 2.5

    def test_string_false_in_config_file_is_rejected(self, tmp_path) -> None:
        path = tmp_path / "c.json"
        path.write_text(
            json.dumps(
                {"bucket_name": "b", "honor_ignore": "false", "dry_run": "false", "ignore": ["drafts"]}
            )
        )
        with pytest.raises(ConfigError, match="must be true or false"):
            load_config(str(path), environ={})

    def test_ignore_must_be_a_list(self) -> None:
        config = dict(DEFAULT_CONFIG, bucket_name="b", ignore="dist/x")
        with pytest.raises(ConfigError, match="ignore"):
            ConfigLoader.validate(config)

    def test_valid_config_passes(self) -> None:
        config = dict(DEFAULT_CONFIG, bucket_name="b")
        assert ConfigLoader.validate(config) is config
