"""
Global test configuration and fixtures
"""

from collections.abc import Callable

import pytest
from tree_sitter import Node as TSNode

from jsdoc_flowgen.parsing import AstTree, SourceFile


@pytest.fixture
def parse_js() -> Callable[[str], AstTree]:
    """Parse a JavaScript snippet into an AstTree"""

    def _parse(code: str) -> AstTree:
        return AstTree.parse(SourceFile.from_content(code, file_path="test.js"))

    return _parse


@pytest.fixture
def find_node() -> Callable[..., TSNode]:
    """First node of a type in document order (optionally the n-th)"""

    def _find(ast: AstTree, node_type: str, index: int = 0) -> TSNode:
        matches = [n for n in ast.walk() if n.type == node_type]
        assert len(matches) > index, f"no {node_type} #{index} in source"
        return matches[index]

    return _find


# Pytest hooks
def pytest_collection_modifyitems(config, items):
    """Add markers from the test path"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
