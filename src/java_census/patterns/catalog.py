"""Pattern catalog: construct kinds and the compiled queries that find them.

Every query is compiled once, when the catalog is built, and shared by all
parses and threads afterwards. A query that does not compile is a defect in
this module and fails the catalog construction with PatternCompileError.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import tree_sitter

from ..exceptions import PatternCompileError
from ..logging_config import get_logger
from ..parsing import JAVA_LANGUAGE
from . import java

logger = get_logger(__name__)


class ConstructKind(Enum):
    """Syntactic constructs that get counted."""

    METHOD = "method"
    VARIABLE = "variable"

    @property
    def label(self) -> str:
        """Label used in findings log lines ("Method", "Variable")."""
        return PATTERN_SOURCES[self].label

    @property
    def plural(self) -> str:
        """Label used in the summary table ("Methods", "Variables")."""
        return PATTERN_SOURCES[self].plural


@dataclass(frozen=True)
class PatternSource:
    """Declaration of how one construct kind is recognised."""

    query: str
    capture: str
    label: str
    plural: str


@dataclass(frozen=True)
class CompiledPattern:
    """A query compiled against the grammar plus the capture to emit."""

    kind: ConstructKind
    query: tree_sitter.Query
    capture: str


PATTERN_SOURCES: dict[ConstructKind, PatternSource] = {
    ConstructKind.METHOD: PatternSource(
        query=java.METHOD_QUERY,
        capture=java.METHOD_CAPTURE,
        label="Method",
        plural="Methods",
    ),
    ConstructKind.VARIABLE: PatternSource(
        query=java.VARIABLE_QUERY,
        capture=java.VARIABLE_CAPTURE,
        label="Variable",
        plural="Variables",
    ),
}


def compile_pattern(
    kind: ConstructKind, source: PatternSource, language: tree_sitter.Language = JAVA_LANGUAGE
) -> CompiledPattern:
    """Compile one pattern source, checking that its capture exists."""
    try:
        query = tree_sitter.Query(language, source.query)
    except Exception as e:
        raise PatternCompileError(kind.value, str(e)) from e

    capture_names = [query.capture_name(i) for i in range(query.capture_count)]
    if source.capture not in capture_names:
        raise PatternCompileError(
            kind.value,
            f"capture @{source.capture} not declared (found: {', '.join(capture_names) or 'none'})",
        )
    return CompiledPattern(kind=kind, query=query, capture=source.capture)


class PatternCatalog:
    """Maps each ConstructKind to its compiled query and capture name."""

    def __init__(
        self,
        sources: dict[ConstructKind, PatternSource] | None = None,
        language: tree_sitter.Language = JAVA_LANGUAGE,
    ) -> None:
        self._sources = dict(sources or PATTERN_SOURCES)
        self._compiled: dict[ConstructKind, CompiledPattern] = {}
        for kind in ConstructKind:
            if kind not in self._sources:
                raise PatternCompileError(kind.value, "no pattern declared")
            self._compiled[kind] = compile_pattern(kind, self._sources[kind], language)
        logger.debug(f"Compiled {len(self._compiled)} construct patterns")

    def pattern_for(self, kind: ConstructKind) -> tuple[tree_sitter.Query, str]:
        """Return the compiled query and capture name for a kind."""
        compiled = self._compiled[kind]
        return compiled.query, compiled.capture

    def query_source(self, kind: ConstructKind) -> str:
        """Return the query text for a kind."""
        return self._sources[kind].query

    def kinds(self) -> list[ConstructKind]:
        return list(self._compiled)
