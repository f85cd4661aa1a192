"""Tree-sitter parser wrapper for the Java grammar.

Usage:
    parser = JavaParser()
    tree = parser.parse(code_bytes, "Foo.java")
    matches = Matcher(catalog).find_matches(tree, code_bytes, ConstructKind.METHOD)
"""

from __future__ import annotations

import threading
from typing import Optional, Union

import tree_sitter
import tree_sitter_java
from tree_sitter import Node, Tree

from .exceptions import ErrorCode, FileSkipError

# tree-sitter >= 0.23 hands out a PyCapsule; wrap it once for the process
JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())


def locate_syntax_error(root: Node) -> Optional[tuple[int, int]]:
    """Return the (row, column) of the first ERROR or MISSING node, if any."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node.start_point[0], node.start_point[1]
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


class JavaParser:
    """Parses UTF-8 Java source into tree-sitter trees.

    tree-sitter parsers carry mutable state, so each thread gets its own.
    """

    def __init__(self, language: tree_sitter.Language = JAVA_LANGUAGE) -> None:
        self.language = language
        self._local = threading.local()

    def _get_parser(self) -> tree_sitter.Parser:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = tree_sitter.Parser(self.language)
            self._local.parser = parser
        return parser

    def parse(self, code: bytes, source_id: Union[str, object] = "<source>") -> Tree:
        """Parse code and return its syntax tree.

        Args:
            code: Source code as UTF-8 bytes
            source_id: Label used in error reports (usually the file path)

        Returns:
            Tree without syntax errors

        Raises:
            FileSkipError: If the parser gives up or the tree has syntax errors
        """
        tree = self._get_parser().parse(code)
        if tree is None:
            raise FileSkipError(str(source_id), "parser returned no tree", code=ErrorCode.CS103)

        if tree.root_node.has_error:
            location = locate_syntax_error(tree.root_node)
            where = f" at line {location[0] + 1}, column {location[1] + 1}" if location else ""
            raise FileSkipError(str(source_id), f"syntax error{where}", code=ErrorCode.CS103)

        return tree
