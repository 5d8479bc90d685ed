"""Activation predicates for features and stages.

A predicate is a small immutable expression tree evaluated against the
answers collected so far and the ids of features that are already active.
Evaluation is pure and total: an unanswered key or a value of the wrong
shape makes the node false instead of raising.

Example:
    >>> gate = and_(
    ...     includes_value("projectWorkspaces", "graphql-server"),
    ...     includes_value("apiFeatures", "database"),
    ... )
    >>> evaluate(gate, {"projectWorkspaces": ["graphql-server"]}, set())
    False
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Iterable, Mapping
from typing import Any

from create_poly_app.exceptions import PredicateError

logger = logging.getLogger(__name__)

# A set is fine as a membership collection; a string is not
COLLECTION_TYPES = (list, tuple, set, frozenset)

_MISSING = object()


def _check_key(key: Any) -> str:
    if not isinstance(key, str) or not key:
        raise PredicateError(f"Predicate key must be a non-empty string, got {key!r}")
    return key


def strict_equal(left: Any, right: Any) -> bool:
    """Equality without cross-type coercion (True != 1, 1 != 1.0)."""
    if type(left) is not type(right):
        return False
    if isinstance(left, COLLECTION_TYPES):
        if len(left) != len(right):
            return False
        if isinstance(left, (set, frozenset)):
            return left == right
        return all(strict_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, dict):
        return left.keys() == right.keys() and all(strict_equal(v, right[k]) for k, v in left.items())
    return bool(left == right)


class Predicate(ABC):
    """Base class for activation predicate nodes."""

    __slots__ = ()

    @abstractmethod
    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        """Evaluate the node. Implementations never raise for missing data."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """Human readable form for plans and logs."""
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


class Equals(Predicate):
    """True iff answers[key] is strictly equal to value."""

    __slots__ = ("key", "value")

    def __init__(self, key: str, value: Any):
        self.key = _check_key(key)
        self.value = value

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        current = answers.get(self.key, _MISSING)
        if current is _MISSING:
            return False
        return strict_equal(current, self.value)

    def describe(self) -> str:
        return f"{self.key} == {self.value!r}"


class IncludesValue(Predicate):
    """True iff answers[key] is a collection containing value."""

    __slots__ = ("key", "value")

    def __init__(self, key: str, value: Any):
        self.key = _check_key(key)
        self.value = value

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        current = answers.get(self.key, _MISSING)
        if not isinstance(current, COLLECTION_TYPES):
            return False
        return any(strict_equal(item, self.value) for item in current)

    def describe(self) -> str:
        return f"{self.value!r} in {self.key}"


class Contains(Predicate):
    """True iff answers[key] contains value as a substring or collection item."""

    __slots__ = ("key", "value")

    def __init__(self, key: str, value: Any):
        self.key = _check_key(key)
        self.value = value

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        current = answers.get(self.key, _MISSING)
        if isinstance(current, str):
            return isinstance(self.value, str) and self.value in current
        if isinstance(current, COLLECTION_TYPES):
            return any(strict_equal(item, self.value) for item in current)
        return False

    def describe(self) -> str:
        return f"{self.key} contains {self.value!r}"


class IsOneOf(Predicate):
    """True iff answers[key] strictly equals one of the given values."""

    __slots__ = ("key", "values")

    def __init__(self, key: str, values: Iterable[Any]):
        self.key = _check_key(key)
        self.values = tuple(values)

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        current = answers.get(self.key, _MISSING)
        if current is _MISSING:
            return False
        return any(strict_equal(current, candidate) for candidate in self.values)

    def describe(self) -> str:
        return f"{self.key} in {list(self.values)!r}"


class FeatureActive(Predicate):
    """True iff the feature id has contributed a stage earlier in the run."""

    __slots__ = ("feature_id",)

    def __init__(self, feature_id: str):
        self.feature_id = _check_key(feature_id)

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        return self.feature_id in activated

    def describe(self) -> str:
        return f"feature {self.feature_id} active"


class Custom(Predicate):
    """Wraps a callable over the answers.

    A callable that raises is logged and treated as false.
    """

    __slots__ = ("func", "label")

    def __init__(self, func: Callable[[Mapping[str, Any]], bool], label: str | None = None):
        if not callable(func):
            raise PredicateError(f"Custom predicate requires a callable, got {func!r}")
        self.func = func
        self.label = label or getattr(func, "__name__", "custom")

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        try:
            return bool(self.func(answers))
        except Exception as e:
            logger.warning(f"Custom predicate '{self.label}' raised {type(e).__name__}: {e}")
            return False

    def describe(self) -> str:
        return f"custom({self.label})"


class _Compound(Predicate):
    __slots__ = ("children",)

    symbol = ""

    def __init__(self, children: Iterable[Predicate]):
        children = tuple(children)
        for child in children:
            if not isinstance(child, Predicate):
                raise PredicateError(
                    f"{type(self).__name__} operands must be predicates, got {child!r}"
                )
        self.children = children

    def describe(self) -> str:
        if not self.children:
            return f"{self.symbol}()"
        inner = f" {self.symbol} ".join(child.describe() for child in self.children)
        return f"({inner})"


class And(_Compound):
    """Short-circuit conjunction. And() with no operands is true."""

    __slots__ = ()

    symbol = "and"

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        return all(child.evaluate(answers, activated) for child in self.children)


class Or(_Compound):
    """Short-circuit disjunction. Or() with no operands is false."""

    __slots__ = ()

    symbol = "or"

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        return any(child.evaluate(answers, activated) for child in self.children)


class Not(Predicate):
    """Boolean negation."""

    __slots__ = ("operand",)

    def __init__(self, operand: Predicate):
        if not isinstance(operand, Predicate):
            raise PredicateError(f"Not operand must be a predicate, got {operand!r}")
        self.operand = operand

    def evaluate(self, answers: Mapping[str, Any], activated: Collection[str]) -> bool:
        return not self.operand.evaluate(answers, activated)

    def describe(self) -> str:
        return f"not {self.operand.describe()}"


# =============================================================================
# Factory Functions
# =============================================================================


def equals(key: str, value: Any) -> Equals:
    return Equals(key, value)


def includes_value(key: str, value: Any) -> IncludesValue:
    return IncludesValue(key, value)


def contains(key: str, value: Any) -> Contains:
    return Contains(key, value)


def is_one_of(key: str, values: Iterable[Any]) -> IsOneOf:
    return IsOneOf(key, values)


def feature_active(feature_id: str) -> FeatureActive:
    return FeatureActive(feature_id)


def custom(func: Callable[[Mapping[str, Any]], bool], label: str | None = None) -> Custom:
    return Custom(func, label)


def and_(*predicates: Predicate) -> And:
    return And(predicates)


def or_(*predicates: Predicate) -> Or:
    return Or(predicates)


def not_(predicate: Predicate) -> Not:
    return Not(predicate)


def validate_predicate(predicate: Any, owner: str = "") -> Predicate | None:
    """Check that an activatedBy value is None or a predicate node.

    Raises:
        PredicateError: If the value is something else.
    """
    if predicate is None or isinstance(predicate, Predicate):
        return predicate
    where = f" on {owner}" if owner else ""
    raise PredicateError(f"Unrecognized activation predicate{where}: {predicate!r}")


def evaluate(
    predicate: Predicate | None,
    answers: Mapping[str, Any],
    activated: Collection[str] = frozenset(),
) -> bool:
    """Evaluate an optional predicate.

    Args:
        predicate: Predicate to evaluate, None means always active
        answers: Answers collected so far
        activated: Ids of features that already contributed a stage

    Returns:
        Whether the predicate holds

    Raises:
        PredicateError: If predicate is not a predicate node
    """
    if predicate is None:
        return True
    validate_predicate(predicate)
    return predicate.evaluate(answers, activated)
