"""Matcher: runs a construct pattern over a syntax tree and yields matches."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import tree_sitter
from tree_sitter import Tree

from .patterns import ConstructKind, PatternCatalog


@dataclass(frozen=True)
class Match:
    """One matched construct: the identifier text and its byte span."""

    kind: ConstructKind
    text: str
    start_byte: int
    end_byte: int


class Matcher:
    """Finds construct occurrences in parsed Java source.

    The tree passed in must come from a successful parse of ``source``.
    """

    def __init__(self, catalog: PatternCatalog) -> None:
        self.catalog = catalog

    def find_matches(self, tree: Tree, source: bytes, kind: ConstructKind) -> Iterator[Match]:
        """Yield a Match for every capture of ``kind`` in tree order.

        Captures other than the kind's declared capture name are dropped:
        alternation patterns may report several differently named captures
        for the same match.
        """
        query, capture_name = self.catalog.pattern_for(kind)
        cursor = tree_sitter.QueryCursor(query)
        # tree-sitter 0.25+: [(pattern_index, {capture_name: [nodes]})]
        for _pattern_index, captures in cursor.matches(tree.root_node):
            for node in captures.get(capture_name, ()):
                yield Match(
                    kind=kind,
                    text=source[node.start_byte : node.end_byte].decode("utf-8"),
                    start_byte=node.start_byte,
                    end_byte=node.end_byte,
                )

    def count(self, tree: Tree, source: bytes, kind: ConstructKind) -> int:
        return sum(1 for _ in self.find_matches(tree, source, kind))
