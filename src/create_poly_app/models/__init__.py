"""Data models for create-poly-app."""

from create_poly_app.models.answers import ConfigurationModel
from create_poly_app.models.enums import (
    DEFAULT_STEP_ORDER,
    DependencyType,
    PromptType,
    StageStatus,
    StageStep,
)
from create_poly_app.models.feature import (
    CodeMod,
    ConfigurationPrompt,
    DependencySpec,
    Feature,
    FeatureStage,
    ScriptArgs,
    ScriptSpec,
    SelectOption,
    TemplateSpec,
)

__all__ = [
    "DEFAULT_STEP_ORDER",
    "CodeMod",
    "ConfigurationModel",
    "ConfigurationPrompt",
    "DependencySpec",
    "DependencyType",
    "Feature",
    "FeatureStage",
    "PromptType",
    "ScriptArgs",
    "ScriptSpec",
    "SelectOption",
    "StageStatus",
    "StageStep",
    "TemplateSpec",
]
