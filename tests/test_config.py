import pytest

from dover.config import (
    DOVER_DEFAULT_CONFIG,
    ConfigError,
    ConfigValues,
    config_values,
    find_config_file,
    load_json_config,
    load_toml_config,
    parse_json_config,
    parse_toml_config,
)


def test_json_config_with_values():
    project_file = """{
	"name": "Some Project",
	"version": "0.0.0",
	"dover": {
		"version_format": "000.a0",
		"versioned_files": [
			"project.json"
		]
	}
}"""
    cfg = parse_json_config(project_file)
    assert cfg.format == "000.a0"
    assert len(cfg.files) == 1


def test_json_config_with_values_2():
    project_file = """{
	"name": "Some Project",
	"version": "",
	"dover": {
		"version_format": "000.a0",
		"versioned_files": [
			"package.json",
            "main.go"
		]
	}
}"""
    cfg = parse_json_config(project_file)
    assert cfg.format == "000.a0"
    assert len(cfg.files) == 2


def test_json_config_with_only_versioned_files():
    project_file = """{
	"name": "Some Project",
	"version": "0.0.0",
	"dover": {
		"versioned_files": [
			"project.json"
		]
	}
}"""
    cfg = parse_json_config(project_file)
    assert cfg.format == ""
    assert len(cfg.files) == 1


def test_json_config_with_no_files():
    project_file = """{
	"name": "Some Project",
	"version": "0.0.0",
	"dover": {
		"version_format": "0.0.0",
		"versioned_files": []
	}
}"""
    with pytest.raises(ConfigError):
        parse_json_config(project_file)


def test_json_config_with_no_file_var():
    project_file = """{
	"name": "Some Project",
	"version": "0.0.0",
	"dover": {
		"version_format": "0.0.0"
	}
}"""
    with pytest.raises(ConfigError):
        parse_json_config(project_file)


def test_json_config_invalid_json():
    with pytest.raises(ConfigError, match="^json parsing failed"):
        parse_json_config("{not json")


@pytest.fixture
def project(tmp_path, monkeypatch):
    (tmp_path / "coding.go").write_text('\\nVERSION = "0.1.0-a0"\\n')
    (tmp_path / "overhill.go").write_text('\\n__version__ = "0.1.0-a0"\\n')
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_no_config_files(project):
    with pytest.raises(ConfigError) as info:
        config_values()
    assert str(info.value) == "unable to find dover configuration"


def test_invalid_dover_config_file(project):
    (project / ".dover").write_text("[dover]")
    with pytest.raises(ConfigError) as info:
        config_values()
    assert str(info.value) == "`.dover` config has no versioned_files"


def test_config_with_invalid_versioned_file(project):
    (project / ".dover").write_text(
        '[dover]\nversioned_files = [\n\t"dunnowherethisis.go",\n\t"overhill.go"\n]\n'
    )
    with pytest.raises(ConfigError) as info:
        config_values()
    assert str(info.value) == "no such file: dunnowherethisis.go"


def test_valid_dover_config_file(project):
    (project / ".dover").write_text(
        '[dover]\nversioned_files = [\n\t"coding.go",\n\t"overhill.go"\n]\n'
    )
    cfg = config_values()
    assert cfg.format == "000.A.0"
    assert len(cfg.files) == 2


def test_valid_pyproject_config_file(project):
    (project / "pyproject.toml").write_text(
        '[tool.dover]\nversioned_files = [\n\t"coding.go",\n\t"overhill.go"\n]\n'
    )
    cfg = config_values()
    assert cfg.format == "000.A.0"
    assert len(cfg.files) == 2


def test_valid_package_json_config_file(project):
    (project / "package.json").write_text(
        """{
	"name": "project",
	"version": "0.1.0.beta.0",
	"dover": {
		"version_format": "000+a0",
		"versioned_files": [
			"coding.go",
			"overhill.go"
		]
	}
}"""
    )
    cfg = config_values()
    assert cfg.format == "000+a0"
    assert len(cfg.files) == 2


def test_config_values_with_explicit_root(tmp_path):
    (tmp_path / "coding.go").write_text("x")
    (tmp_path / ".dover").write_text('[dover]\nversioned_files = ["coding.go:1,2"]\n')
    cfg = config_values(str(tmp_path))
    assert cfg.files == ["coding.go:1,2"]


def test_dover_file_takes_precedence(project):
    (project / ".dover").write_text(
        '[dover]\nversion_format = "000"\nversioned_files = ["coding.go"]\n'
    )
    (project / "pyproject.toml").write_text(
        '[tool.dover]\nversioned_files = ["overhill.go"]\n'
    )
    cfg = config_values()
    assert cfg == ConfigValues(["coding.go"], "000")


def test_pyproject_without_section_falls_through(project, capsys):
    (project / "pyproject.toml").write_text('[project]\nname = "x"\n')
    (project / "package.json").write_text(
        '{"dover": {"versioned_files": ["coding.go"]}}'
    )
    cfg = config_values()
    assert cfg.files == ["coding.go"]
    assert capsys.readouterr().out.startswith(
        "pyproject.toml: No dover config entries in"
    )


def test_find_config_file(tmp_path):
    (tmp_path / ".dover").write_text(DOVER_DEFAULT_CONFIG)
    assert find_config_file(".dover", str(tmp_path)).endswith(".dover")
    with pytest.raises(ConfigError, match="could not find package.json config"):
        find_config_file("package.json", str(tmp_path))


def test_parse_toml_config_without_section():
    with pytest.raises(ConfigError, match="No dover config entries in setup"):
        parse_toml_config('[other]\nkey = 1\n', "setup")


def test_default_config_parses_to_empty_files():
    cfg = parse_toml_config(DOVER_DEFAULT_CONFIG, ".dover")
    assert cfg.files == []
    assert cfg.format == "000-A.0"


def test_load_functions_read_files(tmp_path):
    toml_path = tmp_path / "pyproject.toml"
    toml_path.write_text('[tool.dover]\nversioned_files = ["a.py"]\n')
    json_path = tmp_path / "package.json"
    json_path.write_text('{"dover": {"versioned_files": ["b.js"], "version_format": "000"}}')
    assert load_toml_config(str(toml_path)).files == ["a.py"]
    assert load_json_config(str(json_path)) == ConfigValues(["b.js"], "000")