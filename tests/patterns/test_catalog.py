"""Tests for the construct pattern catalog."""

import pytest

from java_census.exceptions import ErrorCode, PatternCompileError
from java_census.patterns import (
    PATTERN_SOURCES,
    ConstructKind,
    PatternCatalog,
    PatternSource,
)


class TestConstructKind:
    """Test construct kind labels."""

    def test_labels(self):
        """Each kind has a singular and plural label."""
        assert ConstructKind.METHOD.label == "Method"
        assert ConstructKind.METHOD.plural == "Methods"
        assert ConstructKind.VARIABLE.label == "Variable"
        assert ConstructKind.VARIABLE.plural == "Variables"

    def test_every_kind_has_a_source(self):
        """PATTERN_SOURCES covers the whole enumeration."""
        assert set(PATTERN_SOURCES) == set(ConstructKind)


class TestPatternCatalog:
    """Test pattern compilation and lookup."""

    def test_pattern_for_returns_capture_name(self, catalog):
        """pattern_for pairs each kind with its capture name."""
        _query, capture = catalog.pattern_for(ConstructKind.METHOD)
        assert capture == "method.name"
        _query, capture = catalog.pattern_for(ConstructKind.VARIABLE)
        assert capture == "variable.name"

    def test_queries_are_compiled_once(self, catalog):
        """Repeated lookups return the same compiled query object."""
        first, _ = catalog.pattern_for(ConstructKind.VARIABLE)
        second, _ = catalog.pattern_for(ConstructKind.VARIABLE)
        assert first is second

    def test_kinds_in_declaration_order(self, catalog):
        assert catalog.kinds() == [ConstructKind.METHOD, ConstructKind.VARIABLE]

    def test_query_source(self, catalog):
        """query_source returns the declared query text."""
        assert "method_declaration" in catalog.query_source(ConstructKind.METHOD)
        assert "field_declaration" in catalog.query_source(ConstructKind.VARIABLE)


class TestPatternCompileErrors:
    """Malformed patterns fail when the catalog is built."""

    def test_unknown_node_type(self):
        """A query naming a node the grammar lacks fails to compile."""
        sources = dict(PATTERN_SOURCES)
        sources[ConstructKind.METHOD] = PatternSource(
            query="(no_such_node name: (identifier) @method.name)",
            capture="method.name",
            label="Method",
            plural="Methods",
        )
        with pytest.raises(PatternCompileError) as exc_info:
            PatternCatalog(sources)
        assert exc_info.value.kind == "method"
        assert exc_info.value.code is ErrorCode.CS200

    def test_missing_capture(self):
        """A query without the declared capture name is rejected."""
        sources = dict(PATTERN_SOURCES)
        sources[ConstructKind.VARIABLE] = PatternSource(
            query="(variable_declarator name: (identifier) @other)",
            capture="variable.name",
            label="Variable",
            plural="Variables",
        )
        with pytest.raises(PatternCompileError, match="variable"):
            PatternCatalog(sources)

    def test_missing_kind(self):
        """Every kind must have a declared pattern."""
        sources = {ConstructKind.METHOD: PATTERN_SOURCES[ConstructKind.METHOD]}
        with pytest.raises(PatternCompileError):
            PatternCatalog(sources)
