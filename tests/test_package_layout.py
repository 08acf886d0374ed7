# Tests for verifying the package skeleton is importable and documented.

import importlib
import importlib.resources
import pkgutil

import typefill


def test_root_package_has_docstring() -> None:
    """The root package should define a module docstring."""
    assert typefill.__doc__ and typefill.__doc__.strip()


def test_all_modules_have_docstrings() -> None:
    """Ensure every submodule can be imported and has a docstring."""
    for module_info in pkgutil.walk_packages(typefill.__path__, typefill.__name__ + "."):
        module = importlib.import_module(module_info.name)
        assert module.__doc__ and module.__doc__.strip(), f"Missing docstring in {module_info.name}"


def test_module_exports_resolve() -> None:
    """Every name listed in a module's ``__all__`` must exist on the module."""
    for module_info in pkgutil.walk_packages(typefill.__path__, typefill.__name__ + "."):
        module = importlib.import_module(module_info.name)
        for name in getattr(module, "__all__", ()):
            assert hasattr(module, name), f"{module_info.name}.__all__ lists missing {name}"


def test_defaults_file_is_packaged() -> None:
    """The settings loader reads ``defaults.yml`` as package data."""
    defaults = importlib.resources.files("typefill.config").joinpath("defaults.yml")
    assert defaults.is_file()
    assert "max_depth" in defaults.read_text(encoding="utf-8")


def test_errors_share_one_root() -> None:
    """Every public exception derives from ``TypefillError``."""
    errors = [
        getattr(typefill, name)
        for name in typefill.__all__
        if name.endswith("Error")
    ]
    assert errors
    assert all(issubclass(err, typefill.TypefillError) for err in errors)
