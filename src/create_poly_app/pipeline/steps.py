"""Step handlers: dependencies, templates, scripts and mods."""

import logging

from create_poly_app.models.enums import StageStep
from create_poly_app.pipeline.context import PipelineContext
from create_poly_app.pipeline.models import ModsData, ScriptsData, StepData
from create_poly_app.pipeline.plan import PlannedStage
from create_poly_app.pipeline.stage import BaseStep, StageOutcome, Step
from create_poly_app.pipeline.utils import format_count_message
from create_poly_app.utils import substitute_tokens

logger = logging.getLogger(__name__)


class DependenciesStep(BaseStep):
    """Merge declared packages into workspace manifests."""

    step = StageStep.DEPENDENCIES
    display_name = "Merge dependencies"

    def _execute(self, planned: PlannedStage, context: PipelineContext) -> StageOutcome:
        service = self._get_workspace_service(context)
        manifests: list[str] = []
        count = 0
        for spec in planned.stage.dependencies:
            path = service.add_dependencies(spec, context.tokens)
            manifests.append(str(path.relative_to(context.project_root)))
            count += len(spec.names)
        data: StepData = {"paths": manifests}
        return StageOutcome.success(format_count_message("Added", count, 0, "package"), data=dict(data))


class TemplatesStep(BaseStep):
    """Copy templates into the project."""

    step = StageStep.TEMPLATES
    display_name = "Copy templates"

    def _execute(self, planned: PlannedStage, context: PipelineContext) -> StageOutcome:
        service = self._get_template_service(context)
        tokens = context.tokens
        written: list[str] = []
        for spec in planned.stage.templates:
            for path in service.copy_template(spec, context.project_root, tokens):
                written.append(str(path.relative_to(context.project_root)))
        data: StepData = {"paths": written}
        return StageOutcome.success(
            format_count_message("Wrote", len(written), 0, "file"), data=dict(data)
        )


class ScriptsStep(BaseStep):
    """Run shell commands one after another, stopping at the first failure."""

    step = StageStep.SCRIPTS
    display_name = "Run scripts"

    def _execute(self, planned: PlannedStage, context: PipelineContext) -> StageOutcome:
        runner = self._get_script_runner(context)
        args = context.script_args
        data: ScriptsData = {"commands": [], "output": []}
        for spec in planned.stage.scripts:
            result = runner.run(spec, args)
            data["commands"].append(result.command)
            data["output"].append(result.output)
        return StageOutcome.success(
            format_count_message("Ran", len(data["commands"]), 0, "script"), data=dict(data)
        )


class ModsStep(BaseStep):
    """Apply codemods to their target files in declaration order."""

    step = StageStep.MODS
    display_name = "Apply codemods"

    def _execute(self, planned: PlannedStage, context: PipelineContext) -> StageOutcome:
        tokens = context.tokens
        data: ModsData = {"paths": [], "mods": []}
        for relative, mods in planned.stage.mods.items():
            target = context.project_root / substitute_tokens(relative, tokens)
            for mod in mods:
                name = getattr(mod, "__name__", repr(mod))
                logger.info(f"Applying {name} to {target}")
                mod(target)
                data["mods"].append(f"{relative}:{name}")
            data["paths"].append(relative)
        return StageOutcome.success(
            format_count_message("Applied", len(data["mods"]), 0, "codemod"), data=dict(data)
        )


def get_step_handlers() -> dict[StageStep, Step]:
    """Get the handler for every stage step."""
    handlers: list[Step] = [DependenciesStep(), TemplatesStep(), ScriptsStep(), ModsStep()]
    return {handler.step: handler for handler in handlers}
