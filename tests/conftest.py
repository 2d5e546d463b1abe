"""Shared fixtures for the patscan test-suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from patscan import Registry, RegistryBuilder, register_core_searchers


@pytest.fixture
def registry() -> Registry:
    """Registry with the built-in searcher types."""
    return register_core_searchers(RegistryBuilder()).build()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Dump a config dict to a YAML file and return its path."""

    def _write(data: dict[str, Any], name: str = "searchers.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data))
        return path

    return _write


@pytest.fixture
def pronoun_config() -> dict[str, Any]:
    return {
        "searchers": [
            {
                "name": "greeting",
                "type_url": "patscan.v1.BoyerMoore",
                "config": {"pattern": "hello", "ignore_case": True},
            },
            {
                "name": "pronouns",
                "type_url": "patscan.v1.AhoCorasick",
                "config": {"patterns": ["he", "she", "his", "hers"]},
            },
        ]
    }
