from cityevents.utils.logging import find_pyproject, get_pyproject_value


def test_find_pyproject_walks_up(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\nversion = "1.2.3"\n')
    nested = tmp_path / "src" / "demo"
    nested.mkdir(parents=True)

    assert find_pyproject(nested) == tmp_path / "pyproject.toml"


def test_get_pyproject_value_dotted_key(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\nversion = "1.2.3"\n')

    assert get_pyproject_value("project.version", start=tmp_path) == "1.2.3"
    assert get_pyproject_value("project.missing", start=tmp_path, default="x") == "x"


def test_unreadable_pyproject_returns_default(tmp_path):
    (tmp_path / "pyproject.toml").write_text("not = [valid")

    assert get_pyproject_value("project.name", start=tmp_path, default="fallback") == "fallback"
