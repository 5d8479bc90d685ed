"""Tests for TemplateService."""

from pathlib import Path

import pytest

from create_poly_app.config.paths import FEATURES_DIR
from create_poly_app.exceptions import TemplateError
from create_poly_app.models import TemplateSpec
from create_poly_app.services import TemplateService, TemplateTarget

TOKENS = {"projectName": "My_App", "databaseProvider": "postgresql"}


@pytest.fixture
def service(templates_dir: Path) -> TemplateService:
    return TemplateService(templates_dir)


class TestExpand:
    """Tests for listing the files a template writes."""

    def test_file_to_file(self, service: TemplateService, templates_dir: Path) -> None:
        targets = service.expand(TemplateSpec("single.txt", ".env.example"), TOKENS)
        assert targets == [TemplateTarget(templates_dir / "single.txt", ".env.example")]

    def test_file_into_directory(self, service: TemplateService) -> None:
        targets = service.expand(TemplateSpec("greeting.txt.j2", "docs/"), TOKENS)
        assert [t.destination for t in targets] == ["docs/greeting.txt"]
        assert targets[0].render

    def test_destination_without_suffix_is_a_directory(self, service: TemplateService) -> None:
        targets = service.expand(TemplateSpec("single.txt", "api"), TOKENS)
        assert [t.destination for t in targets] == ["api/single.txt"]

    def test_directory_source(self, service: TemplateService) -> None:
        targets = service.expand(TemplateSpec("bundle", "{{projectName}}/web"), TOKENS)
        assert [t.destination for t in targets] == ["My_App/web/a.txt", "My_App/web/nested/b.json"]
        assert [t.render for t in targets] == [False, True]

    def test_glob_source(self, service: TemplateService) -> None:
        targets = service.expand(TemplateSpec("bundle/**/*.j2", "web"), TOKENS)
        assert [t.destination for t in targets] == ["web/nested/b.json"]

    def test_missing_source(self, service: TemplateService) -> None:
        spec = TemplateSpec("nowhere.txt", "out.txt")
        with pytest.raises(TemplateError, match="nowhere.txt"):
            service.expand(spec, TOKENS)
        assert service.expand(spec, TOKENS, strict=False) == [TemplateTarget(None, "out.txt")]

    def test_bundled_sources_resolve_against_features_dir(self) -> None:
        service = TemplateService()
        targets = service.expand(TemplateSpec("project_dir/templates/gitignore", ".gitignore"), {})
        assert targets[0].source == FEATURES_DIR / "project_dir" / "templates" / "gitignore"


class TestCopyTemplate:
    """Tests for writing templates into a project."""

    def test_renders_j2_and_copies_the_rest(self, service: TemplateService, tmp_path: Path) -> None:
        root = tmp_path / "project"
        written = service.copy_template(TemplateSpec("bundle", "web"), root, TOKENS)

        assert written == [root / "web" / "a.txt", root / "web" / "nested" / "b.json"]
        assert (root / "web" / "nested" / "b.json").read_text() == '{"name": "my-app"}\n'

    def test_plain_files_are_not_rendered(self, service: TemplateService, tmp_path: Path) -> None:
        root = tmp_path / "project"
        service.copy_template(TemplateSpec("single.txt", "single.txt"), root, TOKENS)
        assert (root / "single.txt").read_text() == "plain {{ not rendered }}\n"

    def test_overwrites_existing_files(self, service: TemplateService, tmp_path: Path) -> None:
        root = tmp_path / "project"
        (root / "docs").mkdir(parents=True)
        (root / "docs" / "greeting.txt").write_text("old\n")
        service.copy_template(TemplateSpec("greeting.txt.j2", "docs/"), root, TOKENS)
        assert (root / "docs" / "greeting.txt").read_text() == "Hello My_App!\n"

    def test_declared_context_is_token_substituted(self, templates_dir: Path, tmp_path: Path) -> None:
        (templates_dir / "schema.prisma.j2").write_text(
            'provider = "{{ provider }}"\n', encoding="utf-8"
        )
        service = TemplateService(templates_dir)
        spec = TemplateSpec("schema.prisma.j2", "prisma/", context={"provider": "{{databaseProvider}}"})
        service.copy_template(spec, tmp_path, TOKENS)
        assert (tmp_path / "prisma" / "schema.prisma").read_text() == 'provider = "postgresql"\n'

    def test_missing_source(self, service: TemplateService, tmp_path: Path) -> None:
        with pytest.raises(TemplateError, match="missing.txt"):
            service.copy_template(TemplateSpec("missing.txt", "missing.txt"), tmp_path, TOKENS)
        assert not (tmp_path / "missing.txt").exists()

    def test_target_without_source_is_an_error(
        self, service: TemplateService, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A target list that reports no source fails instead of writing."""
        monkeypatch.setattr(
            service, "expand", lambda spec, tokens, strict=True: [TemplateTarget(None, "late.txt")]
        )
        with pytest.raises(TemplateError, match="late.txt.j2"):
            service.copy_template(TemplateSpec("late.txt.j2", "late.txt"), tmp_path, TOKENS)
        assert not (tmp_path / "late.txt").exists()

    def test_render_error(self, templates_dir: Path, tmp_path: Path) -> None:
        (templates_dir / "broken.txt.j2").write_text("{% if %}\n", encoding="utf-8")
        service = TemplateService(templates_dir)
        with pytest.raises(TemplateError, match="broken.txt.j2"):
            service.copy_template(TemplateSpec("broken.txt.j2", "broken.txt"), tmp_path, TOKENS)


class TestRenderString:
    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("{{ name | kebab_case }}", "my-app"),
            ("{{ name | snake_case }}", "my_app"),
            ("{{ name | title_case }}", "My App"),
            ("{{ name | camel_case }}", "MyApp"),
        ],
    )
    def test_filters(self, service: TemplateService, template: str, expected: str) -> None:
        assert service.render_string(template, {"name": "my-app"}) == expected

    def test_year_global(self, service: TemplateService) -> None:
        assert service.render_string("{{ year }}").isdigit()
