"""Developer experience feature: linting, formatting and commit tooling.

Dependencies are merged into the root manifest. Each optional tool has its
own stage gated by the matching answer.
"""

from create_poly_app.activation import equals
from create_poly_app.codemods import add_devx_scripts
from create_poly_app.models import (
    ConfigurationPrompt,
    DependencySpec,
    DependencyType,
    Feature,
    FeatureStage,
    PromptType,
    ScriptSpec,
    TemplateSpec,
)

TEMPLATES = "developer_experience/templates"


def _dev_dependencies(*names: str) -> tuple[DependencySpec, ...]:
    return (
        DependencySpec(list(names), workspace="root", type=DependencyType.DEV_DEPENDENCIES),
    )


def _toggle(prompt_id: str, title: str, description: str, default: bool) -> ConfigurationPrompt:
    return ConfigurationPrompt(
        id=prompt_id,
        type=PromptType.BOOLEAN,
        title=title,
        description=description,
        default_value=default,
    )


feature = Feature(
    id="developer-experience",
    name="Developer Experience Suite",
    description="Linting, formatting, Git hooks and release automation",
    activated_by=equals("enableDevX", True),
    configuration=(
        _toggle(
            "includeAccessibility",
            "Include accessibility linting",
            "Add ESLint rules for accessibility (jsx-a11y)",
            True,
        ),
        _toggle(
            "includeImportSorting",
            "Enable import sorting",
            "Automatically organize and sort imports",
            True,
        ),
        _toggle(
            "enableConventionalCommits",
            "Enable conventional commits",
            "Enforce conventional commit message format",
            True,
        ),
        _toggle(
            "enableSemanticRelease",
            "Enable semantic release",
            "Automatic versioning and changelog generation",
            False,
        ),
    ),
    stages=(
        FeatureStage(
            name="install-core-dependencies",
            dependencies=_dev_dependencies(
                "@eslint/js",
                "@typescript-eslint/eslint-plugin",
                "@typescript-eslint/parser",
                "eslint",
                "eslint-plugin-react-hooks",
                "eslint-plugin-react-refresh",
                "prettier",
                "globals",
                "typescript",
            ),
        ),
        FeatureStage(
            name="install-accessibility-tools",
            activated_by=equals("includeAccessibility", True),
            dependencies=_dev_dependencies("eslint-plugin-jsx-a11y"),
        ),
        FeatureStage(
            name="install-import-sorting-tools",
            activated_by=equals("includeImportSorting", True),
            dependencies=_dev_dependencies(
                "eslint-plugin-import",
                "prettier-plugin-organize-imports",
                "prettier-plugin-packagejson",
            ),
        ),
        FeatureStage(
            name="install-git-hooks-and-conventional-commits",
            activated_by=equals("enableConventionalCommits", True),
            dependencies=_dev_dependencies(
                "lint-staged",
                "@commitlint/cli",
                "@commitlint/config-conventional",
            ),
            templates=(
                TemplateSpec(f"{TEMPLATES}/commitlint.config.js", "commitlint.config.js"),
                TemplateSpec(f"{TEMPLATES}/lintstagedrc.json", ".lintstagedrc.json"),
            ),
        ),
        FeatureStage(
            name="install-semantic-release",
            activated_by=equals("enableSemanticRelease", True),
            dependencies=_dev_dependencies(
                "semantic-release",
                "@semantic-release/changelog",
                "@semantic-release/git",
                "@semantic-release/github",
                "@semantic-release/npm",
                "@semantic-release/commit-analyzer",
                "@semantic-release/release-notes-generator",
            ),
            templates=(TemplateSpec(f"{TEMPLATES}/releaserc.json", ".releaserc.json"),),
        ),
        FeatureStage(
            name="setup-configuration-files",
            templates=(
                TemplateSpec(f"{TEMPLATES}/eslint.config.js.j2", "eslint.config.js"),
                TemplateSpec(f"{TEMPLATES}/prettierrc.json.j2", ".prettierrc.json"),
                TemplateSpec(f"{TEMPLATES}/prettierignore", ".prettierignore"),
            ),
        ),
        FeatureStage(
            name="update-package-json-full",
            mods={"package.json": [add_devx_scripts]},
        ),
        FeatureStage(
            name="run-linting-formatting",
            scripts=(ScriptSpec("pnpm lint:fix && pnpm format:fix"),),
        ),
    ),
)
