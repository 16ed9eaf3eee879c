#!/usr/bin/env python3
#
# tests/test_config.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Tests for environment-driven configuration."""

from __future__ import annotations

import os

import pytest

from wgmanager.utils import config as config_mod
from wgmanager.utils.config import ConfigValidationError, load_config

_KEYS = (
	"WGMANAGER_BASE_URL",
	"WGMANAGER_TIMEOUT",
	"WGMANAGER_DATA_DIR",
	"WGMANAGER_SECRET_KEY",
	"LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
	"""Unset all config variables (restored after the test) and isolate cwd."""
	for key in _KEYS:
		monkeypatch.setenv(key, "")
		monkeypatch.delenv(key)
	monkeypatch.chdir(tmp_path)
	config_mod.reset_config()
	yield monkeypatch
	config_mod.reset_config()


def test_defaults(clean_env):
	cfg = load_config()
	assert cfg.base_url == "http://localhost:8000"
	assert cfg.request_timeout == 30.0
	assert cfg.log_level == "INFO"
	assert cfg.secret_key == ""
	assert cfg.credentials_path.name == "credentials.json"
	assert cfg.credentials_path.parent == cfg.data_dir


def test_environment_overrides(clean_env, tmp_path):
	clean_env.setenv("WGMANAGER_BASE_URL", "https://vpn.example.com")
	clean_env.setenv("WGMANAGER_TIMEOUT", "12.5")
	clean_env.setenv("WGMANAGER_DATA_DIR", str(tmp_path / "data"))
	clean_env.setenv("LOG_LEVEL", "debug")

	cfg = load_config()

	assert cfg.base_url == "https://vpn.example.com"
	assert cfg.request_timeout == 12.5
	assert cfg.data_dir == (tmp_path / "data").resolve()
	assert cfg.log_level == "DEBUG"


def test_invalid_log_level_falls_back(clean_env):
	clean_env.setenv("LOG_LEVEL", "chatty")
	assert load_config().log_level == "INFO"


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_invalid_timeout(clean_env, value):
	clean_env.setenv("WGMANAGER_TIMEOUT", value)
	with pytest.raises(ConfigValidationError):
		load_config()


def test_data_dir_must_be_directory(clean_env, tmp_path):
	blocker = tmp_path / "file"
	blocker.write_text("x")
	clean_env.setenv("WGMANAGER_DATA_DIR", str(blocker))
	with pytest.raises(ConfigValidationError):
		load_config()


def test_settings_env_file(clean_env, tmp_path):
	(tmp_path / "settings.env").write_text(
		"# comment\n"
		"export WGMANAGER_BASE_URL=\"https://vpn.example.com/#frag\"\n"
		"WGMANAGER_SECRET_KEY=pepper # inline comment\n"
		"LOG_LEVEL=WARNING\n"
	)
	clean_env.setenv("LOG_LEVEL", "ERROR")

	cfg = load_config()

	assert cfg.base_url == "https://vpn.example.com/#frag"
	assert cfg.secret_key == "pepper"
	# Already-set variables win over the file
	assert cfg.log_level == "ERROR"
	assert os.environ["WGMANAGER_SECRET_KEY"] == "pepper"


def test_get_config_is_cached(clean_env):
	first = config_mod.get_config()
	clean_env.setenv("WGMANAGER_BASE_URL", "https://changed.example.com")
	assert config_mod.get_config() is first
	config_mod.reset_config()
	assert config_mod.get_config().base_url == "https://changed.example.com"
