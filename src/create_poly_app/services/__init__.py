"""Services for create-poly-app."""

from create_poly_app.services.feature_service import FeatureService, get_feature_service
from create_poly_app.services.prompt_service import (
    AnswerProvider,
    DefaultAnswerProvider,
    InteractiveAnswerProvider,
    get_answer_provider,
)
from create_poly_app.services.script_service import ScriptResult, ScriptRunner
from create_poly_app.services.template_service import TemplateService, TemplateTarget
from create_poly_app.services.workspace_service import WorkspaceService

__all__ = [
    "AnswerProvider",
    "DefaultAnswerProvider",
    "FeatureService",
    "InteractiveAnswerProvider",
    "ScriptResult",
    "ScriptRunner",
    "TemplateService",
    "TemplateTarget",
    "WorkspaceService",
    "get_answer_provider",
    "get_feature_service",
]
