"""Tests for the activation predicate engine."""

import logging

import pytest

from create_poly_app.activation import (
    and_,
    contains,
    custom,
    equals,
    evaluate,
    feature_active,
    includes_value,
    is_one_of,
    not_,
    or_,
    validate_predicate,
)
from create_poly_app.exceptions import PredicateError


class TestEquals:
    """Tests for strict equality."""

    def test_matching_value(self) -> None:
        """Equal values of the same type match."""
        assert evaluate(equals("graphqlClient", "urql"), {"graphqlClient": "urql"})

    def test_missing_key_is_false(self) -> None:
        """An unanswered key never matches, even against None."""
        assert not evaluate(equals("enableDevX", True), {})
        assert not evaluate(equals("enableDevX", None), {})

    def test_bool_does_not_equal_int(self) -> None:
        """True and 1 are different answers."""
        assert not evaluate(equals("enableDevX", True), {"enableDevX": 1})
        assert not evaluate(equals("count", 1), {"count": True})

    def test_int_does_not_equal_float(self) -> None:
        assert not evaluate(equals("port", 1), {"port": 1.0})

    def test_lists_compare_in_order(self) -> None:
        """Lists match only with the same items in the same order."""
        pred = equals("projectWorkspaces", ["react-webapp", "graphql-server"])
        assert evaluate(pred, {"projectWorkspaces": ["react-webapp", "graphql-server"]})
        assert not evaluate(pred, {"projectWorkspaces": ["graphql-server", "react-webapp"]})
        assert not evaluate(pred, {"projectWorkspaces": ("react-webapp", "graphql-server")})


class TestIncludesValue:
    """Tests for membership in multiselect answers."""

    def test_list_membership(self) -> None:
        pred = includes_value("projectWorkspaces", "graphql-server")
        assert evaluate(pred, {"projectWorkspaces": ["react-webapp", "graphql-server"]})
        assert not evaluate(pred, {"projectWorkspaces": ["react-webapp"]})

    def test_sets_and_tuples_are_collections(self) -> None:
        pred = includes_value("apiFeatures", "database")
        assert evaluate(pred, {"apiFeatures": ("database",)})
        assert evaluate(pred, {"apiFeatures": {"database"}})

    def test_string_is_not_a_collection(self) -> None:
        """A plain string answer never includes a value, even as a substring."""
        assert not evaluate(includes_value("apiFeatures", "database"), {"apiFeatures": "database"})

    def test_missing_or_empty(self) -> None:
        pred = includes_value("apiFeatures", "database")
        assert not evaluate(pred, {})
        assert not evaluate(pred, {"apiFeatures": []})
        assert not evaluate(pred, {"apiFeatures": None})


class TestContainsAndIsOneOf:
    """Tests for contains and is_one_of."""

    def test_contains_substring(self) -> None:
        pred = contains("graphqlEndpoint", "localhost")
        assert evaluate(pred, {"graphqlEndpoint": "http://localhost:4000/graphql"})
        assert not evaluate(pred, {"graphqlEndpoint": "https://api.example.com"})

    def test_contains_collection_item(self) -> None:
        assert evaluate(contains("apiFeatures", "database"), {"apiFeatures": ["database"]})

    def test_contains_non_string_needle_in_string(self) -> None:
        assert not evaluate(contains("name", 1), {"name": "a1"})

    def test_is_one_of(self) -> None:
        pred = is_one_of("databaseProvider", ["postgresql", "mysql"])
        assert evaluate(pred, {"databaseProvider": "mysql"})
        assert not evaluate(pred, {"databaseProvider": "sqlite"})
        assert not evaluate(pred, {})


class TestFeatureActive:
    """Tests for feature_active."""

    def test_checks_activated_ids(self) -> None:
        pred = feature_active("vite")
        assert evaluate(pred, {}, {"project-dir", "vite"})
        assert not evaluate(pred, {}, {"project-dir"})

    def test_defaults_to_nothing_activated(self) -> None:
        assert not evaluate(feature_active("vite"), {})


class TestCustom:
    """Tests for custom callables."""

    def test_callable_receives_answers(self) -> None:
        pred = custom(lambda answers: answers.get("graphqlClient") not in (None, "none"))
        assert evaluate(pred, {"graphqlClient": "urql"})
        assert not evaluate(pred, {"graphqlClient": "none"})

    def test_raising_callable_is_false_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Evaluation stays total when the callable raises."""

        def broken(answers: dict) -> bool:
            raise KeyError("projectWorkspaces")

        pred = custom(broken, label="broken-check")
        with caplog.at_level(logging.WARNING, logger="create_poly_app.activation.predicates"):
            assert evaluate(pred, {}) is False
        assert "broken-check" in caplog.text

    def test_requires_callable(self) -> None:
        with pytest.raises(PredicateError):
            custom("not callable")  # type: ignore[arg-type]


class TestCombinators:
    """Tests for and/or/not."""

    def test_and_requires_all(self) -> None:
        pred = and_(
            includes_value("projectWorkspaces", "graphql-server"),
            includes_value("apiFeatures", "database"),
        )
        assert evaluate(pred, {"projectWorkspaces": ["graphql-server"], "apiFeatures": ["database"]})
        assert not evaluate(pred, {"projectWorkspaces": ["graphql-server"], "apiFeatures": []})

    def test_or_requires_any(self) -> None:
        pred = or_(equals("a", 1), equals("b", 2))
        assert evaluate(pred, {"b": 2})
        assert not evaluate(pred, {"a": 2, "b": 1})

    def test_not(self) -> None:
        assert evaluate(not_(equals("enableDevX", True)), {"enableDevX": False})
        assert evaluate(not_(equals("enableDevX", True)), {})

    def test_empty_and_or(self) -> None:
        """and() is true and or() is false, as for empty all()/any()."""
        assert evaluate(and_(), {})
        assert not evaluate(or_(), {})

    def test_and_short_circuits(self) -> None:
        """Later operands are not evaluated once the result is known."""
        calls: list[str] = []

        def record(answers: dict) -> bool:
            calls.append("called")
            return True

        assert not evaluate(and_(equals("a", 1), custom(record)), {"a": 2})
        assert evaluate(or_(equals("a", 2), custom(record)), {"a": 2})
        assert calls == []

    def test_operands_must_be_predicates(self) -> None:
        with pytest.raises(PredicateError):
            and_(equals("a", 1), "b == 2")  # type: ignore[arg-type]
        with pytest.raises(PredicateError):
            not_(True)  # type: ignore[arg-type]


class TestValidation:
    """Tests for construction-time and evaluation-time validation."""

    @pytest.mark.parametrize("key", ["", None, 3])
    def test_key_must_be_non_empty_string(self, key: object) -> None:
        with pytest.raises(PredicateError):
            equals(key, True)  # type: ignore[arg-type]

    def test_none_predicate_is_always_true(self) -> None:
        assert evaluate(None, {})

    def test_evaluate_rejects_non_predicates(self) -> None:
        with pytest.raises(PredicateError):
            evaluate({"type": "equals"}, {})  # type: ignore[arg-type]

    def test_validate_predicate_names_owner(self) -> None:
        with pytest.raises(PredicateError, match="feature 'tailwind'"):
            validate_predicate("yes", owner="feature 'tailwind'")

    def test_evaluation_does_not_mutate_answers(self) -> None:
        answers = {"projectWorkspaces": ["react-webapp"]}
        evaluate(and_(includes_value("projectWorkspaces", "react-webapp"), not_(equals("x", 1))), answers)
        assert answers == {"projectWorkspaces": ["react-webapp"]}


class TestDescribe:
    """Tests for human-readable rendering."""

    def test_describe_nested(self) -> None:
        pred = and_(includes_value("projectWorkspaces", "graphql-server"), not_(equals("enableDevX", True)))
        assert pred.describe() == "('graphql-server' in projectWorkspaces and not enableDevX == True)"
