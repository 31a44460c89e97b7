"""Packaging layout: the namespace packages under src/ must be installable."""

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent


def test_namespace_packages_are_discovered() -> None:
    setuptools = pytest.importorskip("setuptools")
    packages = setuptools.find_namespace_packages(where=str(ROOT), include=["src*"])
    assert "src.backup_mailer" in packages
    assert "src.backup_mailer.router" in packages
    assert "src.backup_mailer.services" in packages


def test_pyproject_enables_namespace_discovery() -> None:
    pyproject = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
    assert "namespaces = true" in pyproject
