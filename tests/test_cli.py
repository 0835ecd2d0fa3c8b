"""Tests for argument parsing, settings resolution and the CLI run."""

import logging
import os
import xml.etree.ElementTree as ET
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from args import parse_args
from cli_config import resolve_settings
from constants import Constants, ExitCodes, PackagingMode, _load_yaml_config, apply_config
import modweaver

NS = "urn:jboss:module:1.9"
MODULE = f"""<module xmlns="{NS}" name="com.example.baz" version="${{foo.bar:baz}}">
    <resources>
        <artifact name="${{foo.bar:baz}}"/>
    </resources>
</module>
"""


def write(path, text):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


@pytest.fixture
def workspace(tmp_path, repo, monkeypatch):
    """Templates, version table and an isolated working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)
    write(str(tmp_path / "templates" / "com" / "example" / "baz" / "main" / "module.xml"), MODULE)
    write(str(tmp_path / "versions.properties"), "foo.bar\\:baz=com.example:baz:1.2.3\n")
    return tmp_path


def base_argv(ws, repo, *extra):
    return [
        "-s", str(ws / "templates"),
        "-o", str(ws / "out"),
        "--versions", str(ws / "versions.properties"),
        "--local-repository", repo,
        *extra,
    ]


class TestArgs:
    """CLI argument parsing."""

    def test_defaults(self):
        ns = parse_args(["-s", "in", "-o", "out", "--versions", "v.properties"])
        assert ns.MODE is None
        assert ns.CHANNEL_RESOLUTION is None
        assert ns.REQUIRE_CHANNEL is None
        assert ns.LOG_LEVEL is None

    def test_repeatable_options(self):
        ns = parse_args([
            "-s", "in", "-o", "out", "--versions", "v",
            "--mode", "FAT", "--channel", "a.yaml", "--channel", "b.yaml",
            "--schema-group", "org.wildfly", "--require-channel",
        ])
        assert ns.MODE == "fat"
        assert ns.CHANNELS == ["a.yaml", "b.yaml"]
        assert ns.SCHEMA_GROUPS == ["org.wildfly"]
        assert ns.REQUIRE_CHANNEL is True

    def test_missing_required(self):
        with pytest.raises(SystemExit):
            parse_args(["-s", "in"])


class TestSettings:
    """Precedence: CLI, then configuration, then defaults."""

    def _args(self, **kwargs):
        defaults = dict(MODE=None, LOCAL_REPOSITORY=None, CHANNELS=None,
                        CHANNEL_RESOLUTION=None, REQUIRE_CHANNEL=None, SCHEMA_GROUPS=None)
        defaults.update(kwargs)
        return SimpleNamespace(**defaults)

    def test_defaults(self):
        settings = resolve_settings(self._args(), {})
        assert settings.mode is PackagingMode.THIN
        assert settings.channels == []
        assert settings.channel_resolution is False
        assert settings.require_channel is False

    def test_config_values(self):
        cfg = {"mode": "fat", "channels": "c.yaml", "channel_resolution": True, "schema_groups": ["g"]}
        settings = resolve_settings(self._args(), cfg)
        assert settings.mode is PackagingMode.FAT
        assert settings.channels == ["c.yaml"]
        assert settings.channel_resolution is True
        assert settings.schema_groups == ["g"]

    def test_cli_wins(self):
        cfg = {"mode": "fat", "channels": ["c.yaml"]}
        settings = resolve_settings(self._args(MODE="thin", CHANNELS=["d.yaml"]), cfg)
        assert settings.mode is PackagingMode.THIN
        assert settings.channels == ["d.yaml"]

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            resolve_settings(self._args(), {"mode": "medium"})


class TestConfigLoading:
    """YAML configuration file."""

    def test_explicit_file(self, tmp_path, monkeypatch):
        path = tmp_path / "cfg.yml"
        path.write_text("mode: fat\nrequest_timeout: 5\n", encoding="utf-8")
        monkeypatch.setattr(Constants, "REQUEST_TIMEOUT", 30)
        cfg = _load_yaml_config(str(path))
        apply_config(cfg)
        assert cfg["mode"] == "fat"
        assert Constants.REQUEST_TIMEOUT == 5

    def test_env_file(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yml"
        path.write_text("mode: thin\n", encoding="utf-8")
        monkeypatch.setenv(Constants.ENV_CONFIG, str(path))
        assert _load_yaml_config() == {"mode": "thin"}

    def test_invalid_tunable_is_ignored(self, monkeypatch):
        monkeypatch.setattr(Constants, "HTTP_RETRY_MAX", 3)
        apply_config({"http_retry_max": "many"})
        assert Constants.HTTP_RETRY_MAX == 3

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n", encoding="utf-8")
        assert _load_yaml_config(str(path)) == {}


class TestRun:
    """End-to-end CLI runs."""

    def test_thin_run(self, workspace, repo):
        code = modweaver.run(parse_args(base_argv(workspace, repo)))
        assert code == ExitCodes.SUCCESS.value
        root = ET.parse(str(workspace / "out" / "com" / "example" / "baz" / "main" / "module.xml")).getroot()
        assert root.get("version") == "1.2.3"
        assert root.find(f"{{{NS}}}resources/{{{NS}}}artifact").get("name") == "com.example:baz:1.2.3"

    def test_fat_run(self, workspace, repo):
        code = modweaver.run(parse_args(base_argv(workspace, repo, "--mode", "fat")))
        assert code == ExitCodes.SUCCESS.value
        module_dir = workspace / "out" / "com" / "example" / "baz" / "main"
        root = ET.parse(str(module_dir / "module.xml")).getroot()
        assert root.find(f"{{{NS}}}resources/{{{NS}}}resource-root").get("path") == "baz-1.2.3.jar"
        assert (module_dir / "baz-1.2.3.jar").is_file()

    def test_require_channel_without_channels(self, workspace, repo):
        code = modweaver.run(parse_args(base_argv(workspace, repo, "--require-channel")))
        assert code == ExitCodes.CONNECTION_ERROR.value

    def test_channel_run(self, workspace, repo):
        channel = workspace / "channel.yaml"
        channel.write_text(
            "name: c\nstreams:\n  - {groupId: com.example, artifactId: baz, version: 1.2.3}\n",
            encoding="utf-8",
        )
        code = modweaver.run(parse_args(base_argv(workspace, repo, "--channel", str(channel), "--require-channel")))
        assert code == ExitCodes.SUCCESS.value

    def test_missing_artifact(self, workspace, tmp_path):
        code = modweaver.run(parse_args(base_argv(workspace, str(tmp_path / "empty"))))
        assert code == ExitCodes.RESOLUTION_ERROR.value

    def test_missing_versions_file(self, workspace, repo):
        argv = base_argv(workspace, repo)
        argv[argv.index("--versions") + 1] = str(workspace / "nope.properties")
        assert modweaver.run(parse_args(argv)) == ExitCodes.FILE_ERROR.value

    def test_main_exits(self, workspace, repo):
        with pytest.raises(SystemExit) as exc_info:
            modweaver.main(base_argv(workspace, repo))
        assert exc_info.value.code == ExitCodes.SUCCESS.value

    def test_invalid_mode_in_config(self, workspace, repo):
        cfg = workspace / "modweaver.yml"
        cfg.write_text("mode: medium\n", encoding="utf-8")
        code = modweaver.run(parse_args(base_argv(workspace, repo, "--config", str(cfg))))
        assert code == ExitCodes.FILE_ERROR.value

    @patch("template.installer.shutil.copy2", side_effect=OSError("No space left on device"))
    def test_fat_copy_failure(self, mock_copy, workspace, repo):
        code = modweaver.run(parse_args(base_argv(workspace, repo, "--mode", "fat")))
        assert code == ExitCodes.FILE_ERROR.value
        assert mock_copy.call_count == 1
        assert not (workspace / "out" / "com" / "example" / "baz" / "main" / "module.xml").exists()


class TestLogLevel:
    """Log level selection when --loglevel is not given."""

    @pytest.fixture(autouse=True)
    def restore_root_level(self):
        root = logging.getLogger()
        level = root.level
        yield
        root.setLevel(level)

    def test_environment_level_applies(self, monkeypatch):
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "DEBUG")
        modweaver._setup_logging(parse_args(["-s", "in", "-o", "out", "--versions", "v"]))
        assert logging.getLogger().level == logging.DEBUG

    def test_cli_level_wins(self, monkeypatch):
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "DEBUG")
        modweaver._setup_logging(parse_args(["-s", "in", "-o", "out", "--versions", "v", "--loglevel", "ERROR"]))
        assert logging.getLogger().level == logging.ERROR
