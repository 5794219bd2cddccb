"""
Parser Registry for Tree-sitter

Manages language parsers and provides a unified interface.
"""

from pathlib import Path

import tree_sitter_javascript
from tree_sitter import Language, Parser

from jsdoc_flowgen.common.observability import get_logger

logger = get_logger(__name__)


class ParserRegistry:
    """
    Registry for language parsers.

    Supports:
    - JavaScript (including JSX)
    """

    def __init__(self):
        self._parsers: dict[str, Parser] = {}
        self._languages: dict[str, Language] = {}
        self._setup_languages()

    def _register_language(self, name: str, language: Language, aliases: list[str] | None = None) -> None:
        """
        Register a language and its aliases.

        Args:
            name: Language name (e.g., "javascript")
            language: tree-sitter Language
            aliases: Optional list of aliases (e.g., ["js"])
        """
        self._languages[name] = language
        for alias in aliases or []:
            self._languages[alias] = language
        logger.debug("language_registered", language=name, aliases=aliases or [])

    def _setup_languages(self):
        """Setup Tree-sitter languages"""
        self._register_language("javascript", Language(tree_sitter_javascript.language()), ["js", "jsx"])

    def get_parser(self, language: str) -> Parser | None:
        """
        Get parser for the specified language.

        Args:
            language: Language name or alias

        Returns:
            Parser instance or None if language not supported
        """
        language = language.lower()

        if language in self._parsers:
            return self._parsers[language]

        lang = self._languages.get(language)
        if lang is None:
            return None

        parser = Parser(lang)
        self._parsers[language] = parser
        return parser

    def detect_language(self, file_path: str | Path) -> str | None:
        """
        Detect language from file extension.

        Args:
            file_path: Path to source file

        Returns:
            Language name or None if not supported
        """
        ext_map = {
            ".js": "javascript",
            ".jsx": "javascript",
            ".mjs": "javascript",
            ".cjs": "javascript",
        }
        return ext_map.get(Path(file_path).suffix.lower())

    def supports_language(self, language: str) -> bool:
        """Check if language is supported"""
        return language.lower() in self._languages


# Global registry instance
_registry: ParserRegistry | None = None


def get_registry() -> ParserRegistry:
    """Get global parser registry instance"""
    global _registry
    if _registry is None:
        _registry = ParserRegistry()
    return _registry
