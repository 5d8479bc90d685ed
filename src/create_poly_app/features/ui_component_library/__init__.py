"""UI component library feature.

Creates a shared component package under ``packages/ui`` and links it into
the web app. The platform answers decide whether the package targets the
web, React Native or both; the library answers pick which kit is installed.
Each kit has its own stage so exactly the chosen one runs.
"""

from collections.abc import Mapping
from typing import Any

from create_poly_app.activation import and_, custom, equals, includes_value, is_one_of
from create_poly_app.codemods import (
    add_react_native_peer_dependencies,
    add_storybook_scripts,
    add_ui_root_scripts,
    add_ui_to_pnpm_workspace,
    add_web_peer_dependencies,
    configure_ui_package_json,
    link_ui_package,
)
from create_poly_app.constants import UI_PACKAGE_DIR, UI_PACKAGE_NAME, WORKSPACE_REACT_WEBAPP
from create_poly_app.models import (
    ConfigurationPrompt,
    DependencySpec,
    DependencyType,
    Feature,
    FeatureStage,
    PromptType,
    SelectOption,
    TemplateSpec,
)

TEMPLATES = "ui_component_library/templates"
UI_MANIFEST = f"{UI_PACKAGE_DIR}/package.json"

PACKAGE_LIBRARIES = {
    "chakra": ["@chakra-ui/react", "@emotion/react", "@emotion/styled", "framer-motion"],
    "mui": ["@mui/material", "@emotion/react", "@emotion/styled", "@mui/icons-material"],
    "antd": ["antd", "@ant-design/icons"],
    "mantine": ["@mantine/core", "@mantine/hooks", "@mantine/notifications"],
    "nativebase": ["native-base", "react-native-svg", "react-native-safe-area-context"],
    "tamagui": ["@tamagui/core", "@tamagui/config", "@tamagui/animations-react-native"],
}

MOBILE_KITS = {
    "rn-elements": ["@rneui/themed", "@rneui/base"],
    "rn-paper": ["react-native-paper", "react-native-vector-icons"],
    "rn-ui-kitten": ["@ui-kitten/components", "@eva-design/eva"],
}


def _platforms(answers: Mapping[str, Any]) -> list[str]:
    return list(answers.get("platforms") or [])


def targets_several_platforms(answers: Mapping[str, Any]) -> bool:
    return len(_platforms(answers)) > 1


def targets_web_only(answers: Mapping[str, Any]) -> bool:
    return _platforms(answers) == ["web"]


def targets_mobile_only(answers: Mapping[str, Any]) -> bool:
    return _platforms(answers) == ["mobile"]


def _ui_dependencies(*names: str, dev: bool = False) -> tuple[DependencySpec, ...]:
    kind = DependencyType.DEV_DEPENDENCIES if dev else DependencyType.DEPENDENCIES
    return (DependencySpec(list(names), workspace=UI_PACKAGE_DIR, type=kind),)


def _platform_template(name: str) -> tuple[TemplateSpec, ...]:
    return (TemplateSpec(f"{TEMPLATES}/platform/{name}.ts", f"{UI_PACKAGE_DIR}/src/platform.ts"),)


def _package_library_stage(library: str) -> FeatureStage:
    return FeatureStage(
        name=f"setup-{library}-components",
        activated_by=and_(
            equals("componentLibrary", "package"),
            equals("packageLibrary", library),
        ),
        dependencies=_ui_dependencies(*PACKAGE_LIBRARIES[library]),
        templates=(
            TemplateSpec(
                f"{TEMPLATES}/provider/provider.tsx.j2",
                f"{UI_PACKAGE_DIR}/src/provider.tsx",
                context={"library": library},
            ),
        ),
    )


def _mobile_kit_stage(kit: str) -> FeatureStage:
    return FeatureStage(
        name=f"setup-{kit}",
        activated_by=and_(
            includes_value("platforms", "mobile"),
            equals("mobileLibrary", kit),
        ),
        dependencies=_ui_dependencies(*MOBILE_KITS[kit]),
    )


def _integration_stage(integration: str, *packages: str, dev: bool = False, **extra: Any) -> FeatureStage:
    return FeatureStage(
        name=f"setup-{integration}-integration",
        activated_by=includes_value("integrations", integration),
        dependencies=_ui_dependencies(*packages, dev=dev),
        **extra,
    )


feature = Feature(
    id="ui-component-library",
    name="UI Component Library",
    description="A shared component package with a choice of UI kit and design system",
    depends_on=("vite",),
    activated_by=and_(
        includes_value("projectWorkspaces", WORKSPACE_REACT_WEBAPP),
        equals("includeUiLibrary", True),
    ),
    configuration=(
        ConfigurationPrompt(
            id="platforms",
            type=PromptType.MULTISELECT,
            title="Which platforms should the components support?",
            required=True,
            default_value=["web"],
            options=(
                SelectOption("Web", "web", "React web applications with Vite"),
                SelectOption("Mobile", "mobile", "React Native applications for iOS and Android"),
            ),
        ),
        ConfigurationPrompt(
            id="componentLibrary",
            type=PromptType.SELECT,
            title="How should the components be built?",
            default_value="shadcn",
            options=(
                SelectOption("shadcn/ui", "shadcn", "Copy-in components styled with Tailwind CSS"),
                SelectOption("Component package", "package", "Install an established UI kit"),
                SelectOption("Custom", "custom", "Start from an empty component package"),
            ),
        ),
        ConfigurationPrompt(
            id="packageLibrary",
            type=PromptType.SELECT,
            title="Which UI kit should be installed?",
            default_value="chakra",
            options=(
                SelectOption("Chakra UI", "chakra", "React only"),
                SelectOption("Material UI", "mui", "React only"),
                SelectOption("Ant Design", "antd", "React only"),
                SelectOption("Mantine", "mantine", "React only"),
                SelectOption("NativeBase", "nativebase", "Web and mobile"),
                SelectOption("Tamagui", "tamagui", "Web and mobile"),
            ),
            show_if=equals("componentLibrary", "package"),
        ),
        ConfigurationPrompt(
            id="mobileLibrary",
            type=PromptType.SELECT,
            title="Add a React Native component kit?",
            default_value="none",
            options=(
                SelectOption("None", "none"),
                SelectOption("React Native Elements", "rn-elements"),
                SelectOption("React Native Paper", "rn-paper"),
                SelectOption("UI Kitten", "rn-ui-kitten"),
            ),
            show_if=includes_value("platforms", "mobile"),
        ),
        ConfigurationPrompt(
            id="designSystemFeatures",
            type=PromptType.MULTISELECT,
            title="Which design system pieces should be generated?",
            default_value=["tokens", "theming"],
            options=(
                SelectOption("Design tokens", "tokens", "Colors, spacing and radii in one module"),
                SelectOption("Theming", "theming", "Light and dark themes"),
            ),
        ),
        ConfigurationPrompt(
            id="accessibilityLevel",
            type=PromptType.SELECT,
            title="Accessibility tooling",
            default_value="standard",
            options=(
                SelectOption("Basic", "basic", "Semantic markup only"),
                SelectOption("Standard", "standard", "Runtime axe checks in development"),
                SelectOption("Enhanced", "enhanced", "Axe checks in tests as well"),
            ),
        ),
        ConfigurationPrompt(
            id="integrations",
            type=PromptType.MULTISELECT,
            title="Which integrations should the package include?",
            default_value=["icons"],
            options=(
                SelectOption("Storybook", "storybook"),
                SelectOption("Forms", "forms", "React Hook Form"),
                SelectOption("Animations", "animations", "Framer Motion"),
                SelectOption("Icons", "icons", "Lucide React"),
            ),
        ),
    ),
    stages=(
        FeatureStage(
            name="setup-workspace-structure",
            templates=(
                TemplateSpec(
                    f"{TEMPLATES}/package",
                    UI_PACKAGE_DIR,
                    context={"packageName": UI_PACKAGE_NAME},
                ),
            ),
            mods={
                "pnpm-workspace.yaml": [add_ui_to_pnpm_workspace],
                UI_MANIFEST: [configure_ui_package_json],
                "package.json": [add_ui_root_scripts],
            },
        ),
        FeatureStage(
            name="setup-shared-components",
            activated_by=custom(targets_several_platforms, "several platforms"),
            dependencies=_ui_dependencies("react-native-web"),
            templates=_platform_template("shared"),
            mods={UI_MANIFEST: [add_react_native_peer_dependencies]},
        ),
        FeatureStage(
            name="setup-web-only-components",
            activated_by=and_(
                includes_value("platforms", "web"),
                custom(targets_web_only, "web only"),
            ),
            dependencies=_ui_dependencies("@types/react", "@types/react-dom", dev=True),
            templates=_platform_template("web"),
            mods={UI_MANIFEST: [add_web_peer_dependencies]},
        ),
        FeatureStage(
            name="setup-mobile-only-components",
            activated_by=custom(targets_mobile_only, "mobile only"),
            templates=_platform_template("shared"),
            mods={UI_MANIFEST: [add_react_native_peer_dependencies]},
        ),
        FeatureStage(
            name="setup-shadcn-components",
            activated_by=equals("componentLibrary", "shadcn"),
            dependencies=_ui_dependencies("class-variance-authority", "clsx", "tailwind-merge"),
            templates=(TemplateSpec(f"{TEMPLATES}/shadcn", UI_PACKAGE_DIR),),
        ),
        *(_package_library_stage(library) for library in PACKAGE_LIBRARIES),
        *(_mobile_kit_stage(kit) for kit in MOBILE_KITS),
        FeatureStage(
            name="setup-design-tokens",
            activated_by=includes_value("designSystemFeatures", "tokens"),
            templates=(TemplateSpec(f"{TEMPLATES}/tokens/tokens.ts", f"{UI_PACKAGE_DIR}/src/tokens.ts"),),
        ),
        FeatureStage(
            name="setup-theme-system",
            activated_by=includes_value("designSystemFeatures", "theming"),
            templates=(TemplateSpec(f"{TEMPLATES}/tokens/theme.ts.j2", f"{UI_PACKAGE_DIR}/src/theme.ts"),),
        ),
        FeatureStage(
            name="setup-standard-accessibility",
            activated_by=is_one_of("accessibilityLevel", ["standard", "enhanced"]),
            dependencies=_ui_dependencies("@axe-core/react", dev=True),
        ),
        FeatureStage(
            name="setup-enhanced-accessibility",
            activated_by=equals("accessibilityLevel", "enhanced"),
            dependencies=_ui_dependencies("jest-axe", "@testing-library/jest-dom", dev=True),
        ),
        _integration_stage(
            "storybook",
            "storybook",
            "@storybook/react-vite",
            "@storybook/addon-essentials",
            dev=True,
            templates=(TemplateSpec(f"{TEMPLATES}/storybook/main.ts", f"{UI_PACKAGE_DIR}/.storybook/main.ts"),),
            mods={UI_MANIFEST: [add_storybook_scripts]},
        ),
        _integration_stage("forms", "react-hook-form", "@hookform/resolvers"),
        _integration_stage("animations", "framer-motion"),
        _integration_stage("icons", "lucide-react"),
        FeatureStage(
            name="configure-workspace-integration",
            activated_by=includes_value("platforms", "web"),
            mods={"web/package.json": [link_ui_package]},
        ),
    ),
)
