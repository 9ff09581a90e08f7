"""Tests for bots.config module."""

import json
import os
from unittest import mock

import pytest

from bots.config import (
    DEFAULT_PLAYERS,
    RosterConfig,
    build_roster_config,
    env_bool,
    env_float,
    env_int,
    load_roster_file,
    read_roster_config,
)


class TestEnvHelpers:
    """Test env_bool / env_int / env_float."""

    def test_env_bool_values(self):
        """Should parse truthy and falsy spellings and fall back otherwise."""
        cases = [
            ("1", True),
            (" Yes ", True),
            ("ON", True),
            ("0", False),
            ("off", False),
        ]
        for value, expected in cases:
            with mock.patch.dict(os.environ, {"TEST_VAR": value}, clear=True):
                assert env_bool("TEST_VAR", default=not expected) is expected

        with mock.patch.dict(os.environ, {"TEST_VAR": "maybe"}, clear=True):
            assert env_bool("TEST_VAR", default=True) is True
        with mock.patch.dict(os.environ, {}, clear=True):
            assert env_bool("TEST_VAR") is False

    def test_env_int_values(self):
        """Should parse integers and return default for bad input."""
        with mock.patch.dict(os.environ, {"TEST_VAR": "  789  "}, clear=True):
            assert env_int("TEST_VAR") == 789
        for value in ["", "12.34", "abc"]:
            with mock.patch.dict(os.environ, {"TEST_VAR": value}, clear=True):
                assert env_int("TEST_VAR", default=42) == 42
        with mock.patch.dict(os.environ, {}, clear=True):
            assert env_int("TEST_VAR") is None

    def test_env_float_values(self):
        """Should parse floats and return default for bad input."""
        with mock.patch.dict(os.environ, {"TEST_VAR": "7.5"}, clear=True):
            assert env_float("TEST_VAR") == 7.5
        with mock.patch.dict(os.environ, {"TEST_VAR": "seven"}, clear=True):
            assert env_float("TEST_VAR", default=5.0) == 5.0
        with mock.patch.dict(os.environ, {}, clear=True):
            assert env_float("TEST_VAR") is None


class TestBuildRosterConfig:
    def test_default_players(self):
        config = build_roster_config(DEFAULT_PLAYERS)
        assert len(config.roster) == 14
        assert config.roster[0] == "Caria"
        assert config.ratings.rating_of("Salvador") == 80.0
        assert config.ratings.rating_of("Stranger") == 5.0

    def test_dict_entries_keep_order(self):
        config = build_roster_config(
            [
                {"name": "Zé", "rating": 60},
                {"name": "Ana"},
                {"name": " Bia ", "rating": "42.5"},
            ]
        )
        assert config.roster == ("Zé", "Ana", "Bia")
        assert config.ratings.rating_of("Zé") == 60.0
        assert config.ratings.rating_of("Bia") == 42.5
        assert "Ana" not in config.ratings.ratings

    def test_missing_rating_uses_default(self):
        config = build_roster_config([{"name": "Ana"}], default_rating=3.0)
        assert config.ratings.rating_of("Ana") == 3.0

    @pytest.mark.parametrize(
        "players",
        [
            [],
            [{"name": ""}],
            [{"name": "Ana"}, {"name": "Ana"}],
            [{"name": "Ana", "rating": "great"}],
        ],
    )
    def test_invalid_rosters(self, players):
        with pytest.raises(ValueError):
            build_roster_config(players)

    def test_roster_config_immutable(self):
        config = build_roster_config(DEFAULT_PLAYERS)
        with pytest.raises(AttributeError):
            config.roster = ()


class TestRosterFile:
    def test_load_roster_file(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text(
            json.dumps({"players": [{"name": "Ana", "rating": 50}, {"name": "Bia"}]}),
            encoding="utf-8",
        )
        config = load_roster_file(path)
        assert isinstance(config, RosterConfig)
        assert config.roster == ("Ana", "Bia")

    def test_load_roster_file_requires_players(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text(json.dumps({"people": []}), encoding="utf-8")
        with pytest.raises(ValueError, match="players"):
            load_roster_file(path)

    def test_read_roster_config_default(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = read_roster_config()
        assert config.roster == tuple(name for name, _ in DEFAULT_PLAYERS)

    def test_read_roster_config_from_env(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text(json.dumps({"players": [{"name": "Ana"}]}), encoding="utf-8")
        env_vars = {"FUTEBOL_ROSTER_FILE": str(path), "FUTEBOL_DEFAULT_RATING": "9"}
        with mock.patch.dict(os.environ, env_vars, clear=True):
            config = read_roster_config()
        assert config.roster == ("Ana",)
        assert config.ratings.rating_of("Ana") == 9.0
