"""Activation predicate engine."""

from create_poly_app.activation.predicates import (
    And,
    Contains,
    Custom,
    Equals,
    FeatureActive,
    IncludesValue,
    IsOneOf,
    Not,
    Or,
    Predicate,
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
    strict_equal,
    validate_predicate,
)

__all__ = [
    "And",
    "Contains",
    "Custom",
    "Equals",
    "FeatureActive",
    "IncludesValue",
    "IsOneOf",
    "Not",
    "Or",
    "Predicate",
    "and_",
    "contains",
    "custom",
    "equals",
    "evaluate",
    "feature_active",
    "includes_value",
    "is_one_of",
    "not_",
    "or_",
    "strict_equal",
    "validate_predicate",
]
