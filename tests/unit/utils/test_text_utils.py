"""Tests for token substitution and path helpers."""

from pathlib import Path

import pytest

from create_poly_app.utils import (
    is_dir_empty,
    normalize_relative,
    substitute_in_value,
    substitute_tokens,
)


class TestSubstituteTokens:
    def test_replaces_known_keys(self) -> None:
        assert substitute_tokens("mkdir -p {{ projectName }}", {"projectName": "demo"}) == "mkdir -p demo"

    def test_unknown_keys_stay_visible(self) -> None:
        assert substitute_tokens("cd {{missing}}", {}) == "cd {{missing}}"

    def test_value_kinds(self) -> None:
        values = {"list": ["web", "api"], "flag": True, "port": 4000}
        assert substitute_tokens("{{list}} {{flag}} {{port}}", values) == "web,api true 4000"

    def test_nested_values(self) -> None:
        value = {"clientType": "urql", "urls": ["{{graphqlEndpoint}}"], "port": 1}
        assert substitute_in_value(value, {"graphqlEndpoint": "http://api"}) == {
            "clientType": "urql",
            "urls": ["http://api"],
            "port": 1,
        }


class TestNormalizeRelative:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("./api/../api/src/", "api/src"),
            ("web\\src\\index.css", "web/src/index.css"),
            (".", "."),
            ("", "."),
            ("../outside", "../outside"),
        ],
    )
    def test_normalize(self, path: str, expected: str) -> None:
        assert normalize_relative(path) == expected


class TestIsDirEmpty:
    def test_missing_and_empty(self, tmp_path: Path) -> None:
        assert is_dir_empty(tmp_path / "missing")
        assert is_dir_empty(tmp_path)

    def test_non_empty_and_file(self, tmp_path: Path) -> None:
        (tmp_path / "file.txt").write_text("x")
        assert not is_dir_empty(tmp_path)
        assert not is_dir_empty(tmp_path / "file.txt")
