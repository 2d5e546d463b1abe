"""Tests for config parsing (patscan._config).

Validates the dict / YAML → config type conversion.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from patscan import (
    ConfigParseError,
    SearcherConfig,
    SearchSetConfig,
    TypedConfig,
    load_search_config,
    parse_search_config,
)


class TestParseSearchConfig:
    """Tests for parse_search_config()."""

    def test_mixed_searchers(self, pronoun_config: dict[str, Any]) -> None:
        config = parse_search_config(pronoun_config)
        assert isinstance(config, SearchSetConfig)
        assert config.names == ("greeting", "pronouns")
        greeting = config.searchers[0]
        assert isinstance(greeting, SearcherConfig)
        assert greeting.searcher == TypedConfig(
            type_url="patscan.v1.BoyerMoore",
            config={"pattern": "hello", "ignore_case": True},
        )

    def test_config_payload_defaults_to_empty(self) -> None:
        config = parse_search_config(
            {"searchers": [{"name": "a", "type_url": "patscan.v1.AhoCorasick"}]}
        )
        assert config.searchers[0].searcher.config == {}

    def test_empty_searcher_list(self) -> None:
        assert parse_search_config({"searchers": []}).searchers == ()

    def test_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="expected dict"):
            parse_search_config([])  # type: ignore[arg-type]

    def test_missing_searchers(self) -> None:
        with pytest.raises(ConfigParseError, match="'searchers'"):
            parse_search_config({})

    def test_searchers_not_a_list(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a list"):
            parse_search_config({"searchers": "nope"})

    def test_searcher_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="searcher must be a dict"):
            parse_search_config({"searchers": ["nope"]})

    def test_missing_name(self) -> None:
        with pytest.raises(ConfigParseError, match="'name'"):
            parse_search_config({"searchers": [{"type_url": "x"}]})

    @pytest.mark.parametrize("name", ["", 7, None])
    def test_invalid_name(self, name: Any) -> None:
        data = {"searchers": [{"name": name, "type_url": "x"}]}
        with pytest.raises(ConfigParseError):
            parse_search_config(data)

    def test_duplicate_names(self) -> None:
        entry = {"name": "dup", "type_url": "patscan.v1.BoyerMoore"}
        with pytest.raises(ConfigParseError, match="duplicate searcher name: 'dup'"):
            parse_search_config({"searchers": [entry, dict(entry)]})

    def test_missing_type_url(self) -> None:
        with pytest.raises(ConfigParseError, match="'type_url'"):
            parse_search_config({"searchers": [{"name": "a"}]})

    def test_type_url_not_a_string(self) -> None:
        with pytest.raises(ConfigParseError, match="type_url must be a string"):
            parse_search_config({"searchers": [{"name": "a", "type_url": 1}]})

    def test_payload_not_a_dict(self) -> None:
        data = {"searchers": [{"name": "a", "type_url": "x", "config": ["p"]}]}
        with pytest.raises(ConfigParseError, match="config must be a dict"):
            parse_search_config(data)


class TestLoadSearchConfig:
    """Tests for load_search_config()."""

    def test_yaml_file(
        self,
        write_config: Callable[..., Path],
        pronoun_config: dict[str, Any],
    ) -> None:
        path = write_config(pronoun_config)
        assert load_search_config(path) == parse_search_config(pronoun_config)

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.json"
        path.write_text(
            '{"searchers": [{"name": "a", "type_url": "patscan.v1.BoyerMoore",'
            ' "config": {"pattern": "x"}}]}'
        )
        assert load_search_config(str(path)).names == ("a",)

    def test_binary_pattern(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text(
            "searchers:\n"
            "  - name: magic\n"
            "    type_url: patscan.v1.BoyerMoore\n"
            '    config: {pattern: !!binary "iVBORw=="}\n'
        )
        config = load_search_config(path)
        assert config.searchers[0].searcher.config["pattern"] == b"\x89PNG"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("searchers: [unclosed\n")
        with pytest.raises(ConfigParseError, match="invalid YAML"):
            load_search_config(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ConfigParseError, match="expected dict"):
            load_search_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_search_config(tmp_path / "nope.yaml")
