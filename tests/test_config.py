from __future__ import annotations

from pathlib import Path

import pytest

from quilt_pages.config import (
    BuildProfile,
    ConfigError,
    PageSettings,
    load_page_settings,
    load_project_config,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_toml_page_settings(tmp_path: Path) -> None:
    path = _write(tmp_path / "page.toml", 'theme = "basic"\ntemplate = "post"\nextra = 1\n')
    assert load_page_settings(path) == PageSettings(theme="basic", template="post")


def test_yaml_page_settings(tmp_path: Path) -> None:
    path = _write(tmp_path / "page.yml", "theme: basic\n")
    settings = load_page_settings(path)
    assert settings == PageSettings(theme="basic")
    assert not settings.requests_template


def test_empty_documents_yield_empty_settings(tmp_path: Path) -> None:
    assert load_page_settings(_write(tmp_path / "a.toml", "")) == PageSettings()
    assert load_page_settings(_write(tmp_path / "b.yaml", "")) == PageSettings()


def test_non_string_template_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path / "page.toml", 'theme = "basic"\ntemplate = 3\n')
    with pytest.raises(ConfigError, match="Could not decode"):
        load_page_settings(path)


def test_yaml_parse_error_is_tagged(tmp_path: Path) -> None:
    path = _write(tmp_path / "page.yaml", "theme: [unclosed\n")
    with pytest.raises(ConfigError) as excinfo:
        load_page_settings(path)
    assert excinfo.value.source == "Yaml"


def test_yaml_must_be_a_mapping(tmp_path: Path) -> None:
    path = _write(tmp_path / "page.yaml", "- basic\n- post\n")
    with pytest.raises(ConfigError):
        load_page_settings(path)


@pytest.fixture
def project_config(tmp_path: Path) -> Path:
    return _write(
        tmp_path / "Quilt.toml",
        """
[[build]]
name = "preview"
out = "preview"

[[build]]
name = "release"
out = "public"
default = true
pygments_style = "friendly"
""".lstrip(),
    )


def test_project_config_lists_builds(project_config: Path) -> None:
    config = load_project_config(project_config)
    assert config.builds == (
        BuildProfile(name="preview", out=Path("preview")),
        BuildProfile(
            name="release", out=Path("public"), default=True, pygments_style="friendly"
        ),
    )


def test_select_by_name_and_default(project_config: Path) -> None:
    config = load_project_config(project_config)
    assert config.select("preview").out == Path("preview")
    assert config.select().name == "release"


def test_select_unknown_name(project_config: Path) -> None:
    with pytest.raises(ConfigError, match="No build named staging"):
        load_project_config(project_config).select("staging")


def test_select_without_default(tmp_path: Path) -> None:
    path = _write(tmp_path / "Quilt.toml", '[[build]]\nname = "a"\nout = "out"\n')
    with pytest.raises(ConfigError) as excinfo:
        load_project_config(path).select()
    assert excinfo.value.source == "Pre-Build"
    assert excinfo.value.message == "No build specified and no default."


def test_missing_project_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_project_config(tmp_path / "Quilt.toml")
    assert excinfo.value.source == "Init"
    assert excinfo.value.message == "Could not open Quilt.toml"


def test_undecodable_project_config(tmp_path: Path) -> None:
    path = _write(tmp_path / "Quilt.toml", "[[build]\n")
    with pytest.raises(ConfigError, match="Could not decode Quilt.toml"):
        load_project_config(path)


def test_build_requires_out(tmp_path: Path) -> None:
    path = _write(tmp_path / "Quilt.toml", '[[build]]\nname = "a"\n')
    with pytest.raises(ConfigError, match="need 'name' and 'out'"):
        load_project_config(path)


@pytest.mark.parametrize("value", ["", ".", "..", "a/b", "../up", "a\\\\b"])
def test_theme_must_be_a_single_path_component(tmp_path: Path, value: str) -> None:
    path = _write(tmp_path / "page.toml", f'theme = "{value}"\ntemplate = "post"\n')
    with pytest.raises(ConfigError, match="not a plain theme or template name"):
        load_page_settings(path)


def test_yaml_template_traversal_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path / "page.yaml", "theme: basic\ntemplate: ../secret\n")
    with pytest.raises(ConfigError) as excinfo:
        load_page_settings(path)
    assert excinfo.value.source == "Yaml"
