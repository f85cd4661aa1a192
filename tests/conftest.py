"""Shared fixtures for java-census tests."""

from pathlib import Path

import pytest

from java_census.parsing import JavaParser
from java_census.patterns import PatternCatalog

EXAMPLE_SOURCE = "class C { int x = 1; void m(){ int y = 2; } }"

BROKEN_SOURCE = "class Broken { void m( { int = ; }"


@pytest.fixture
def example_source():
    """Reference class: fields/locals x, y and method m."""
    return EXAMPLE_SOURCE


@pytest.fixture
def broken_source():
    return BROKEN_SOURCE


@pytest.fixture
def make_class():
    return java_class


@pytest.fixture(scope="session")
def catalog():
    """Compiled pattern catalog shared by all tests."""
    return PatternCatalog()


@pytest.fixture
def parser():
    return JavaParser()


@pytest.fixture
def write_file(tmp_path):
    """Write a file below tmp_path, creating parent directories."""

    def _write(relative: str, content: str = EXAMPLE_SOURCE, encoding: str = "utf-8") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=encoding)
        return path

    return _write


def java_class(name: str, methods: int = 0, fields: int = 0) -> str:
    """Build a Java class with the given number of methods and fields."""
    members = [f"    int f{i} = {i};" for i in range(fields)]
    members += [f"    void m{i}() {{ }}" for i in range(methods)]
    return f"class {name} {{\n" + "\n".join(members) + "\n}\n"
