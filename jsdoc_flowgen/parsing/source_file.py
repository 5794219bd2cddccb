"""
Source File representation
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class SourceFile:
    """
    Represents one JavaScript source unit.

    Attributes:
        file_path: Path the source was read from ("<stdin>"/"<string>" for in-memory input)
        content: Source text
        language: Grammar name
        encoding: Text encoding (default: utf-8)
    """

    file_path: str
    content: str
    language: str
    encoding: str = "utf-8"

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        language: str | None = None,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Load source file from disk.

        Args:
            file_path: Path to file
            language: Language override (auto-detected if None)
            encoding: File encoding

        Returns:
            SourceFile instance
        """
        file_path = Path(file_path)
        content = file_path.read_text(encoding=encoding)

        if language is None:
            from .parser_registry import get_registry

            language = get_registry().detect_language(file_path)
            if language is None:
                raise ValueError(f"Could not detect language for: {file_path}")

        return cls(
            file_path=str(file_path),
            content=content,
            language=language,
            encoding=encoding,
        )

    @classmethod
    def from_content(
        cls,
        content: str,
        language: str = "javascript",
        file_path: str = "<string>",
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """Create source file from a content string."""
        return cls(
            file_path=file_path,
            content=content,
            language=language,
            encoding=encoding,
        )

    @property
    def content_bytes(self) -> bytes:
        """Encoded content (tree-sitter works on bytes)"""
        return self.content.encode(self.encoding)
