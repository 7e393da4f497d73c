import pytest  # noqa: F401
from pathlib import Path

from media_annotation.utils.misc import load_module


def test_load_module(tmp_path: Path):
    script = tmp_path / "plugin.py"
    script.write_text("ANSWER = 42\n")
    module = load_module(script, module_name="media_annotation_test_plugin")
    assert module.ANSWER == 42
    assert module.__name__ == "media_annotation_test_plugin"


def test_load_module_package_allows_relative_imports(tmp_path: Path):
    package = tmp_path / "somepkg"
    package.mkdir()
    (package / "__init__.py").write_text(
        "def value():\n    from .impl import VALUE\n    return VALUE\n"
    )
    (package / "impl.py").write_text("VALUE = 'loaded'\n")
    module = load_module(package / "__init__.py", module_name="media_annotation_test_pkg")
    assert module.value() == "loaded"
