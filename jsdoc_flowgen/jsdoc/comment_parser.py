"""
JSDoc comment parser.

Turns a block-comment body (delimiters already stripped) into an ordered list
of tags. Tags start at any "@title" that begins a line or follows whitespace
outside of braces, so several tags may share a line:

    /** @param {string} name @return {number} */
"""

import re

from jsdoc_flowgen.common.exceptions import MalformedDocCommentError, TypeExpressionSyntaxError
from jsdoc_flowgen.common.observability import get_logger
from jsdoc_flowgen.jsdoc.models import OptionalType, Tag
from jsdoc_flowgen.jsdoc.type_parser import parse_type

logger = get_logger(__name__)

_TITLE_RE = re.compile(r"[A-Za-z][\w-]*")
_LINE_DECORATION_RE = re.compile(r"^\s*\*? ?")

TITLE_SYNONYMS = {
    "arg": "param",
    "argument": "param",
    "prop": "property",
    "exception": "throws",
    "constant": "const",
}

# Titles whose body may start with a {type}
TYPED_TITLES = frozenset(
    {
        "param",
        "return",
        "returns",
        "enum",
        "type",
        "typedef",
        "property",
        "this",
        "throws",
        "define",
        "const",
    }
)

# Titles followed by a name
NAMED_TITLES = frozenset({"param", "property", "typedef"})


def unwrap(body: str) -> str:
    """
    Strip comment decoration.

    Removes the "*" left over from "/**" and the leading " * " of every line.
    """
    if body.startswith("*"):
        body = body[1:]
    lines = [_LINE_DECORATION_RE.sub("", line, count=1) for line in body.splitlines()]
    return "\n".join(lines).strip()


def _split_tags(text: str) -> list[str]:
    """Split unwrapped text into "@title ..." chunks (leading description dropped)."""
    chunks: list[str] = []
    start: int | None = None
    depth = 0
    for i, ch in enumerate(text):
        if ch == "{":
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
        elif ch == "@" and depth == 0 and (i == 0 or text[i - 1].isspace()):
            if _TITLE_RE.match(text, i + 1):
                if start is not None:
                    chunks.append(text[start:i])
                start = i
    if start is not None:
        chunks.append(text[start:])
    return chunks


def _take_braced(text: str) -> tuple[str, str] | None:
    """Split "{...} rest" into (inside, rest), honouring nested braces."""
    if not text.startswith("{"):
        return None
    depth = 0
    for i, ch in enumerate(text):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[1:i], text[i + 1 :]
    return None


def _take_name(text: str) -> tuple[str | None, bool, str]:
    """Read a tag name: "name", "[name]" or "[name=default]". Returns (name, optional, rest)."""
    if text.startswith("["):
        end = text.find("]")
        if end == -1:
            return None, False, text
        inner = text[1:end]
        name = inner.split("=", 1)[0].strip()
        return (name or None), True, text[end + 1 :]
    match = re.match(r"\S+", text)
    if match is None:
        return None, False, text
    return match.group(0), False, text[match.end() :]


def _parse_tag(chunk: str) -> Tag:
    title_match = _TITLE_RE.match(chunk, 1)
    raw_title = title_match.group(0)
    title = TITLE_SYNONYMS.get(raw_title, raw_title)
    rest = chunk[title_match.end() :].strip()

    type_expr = None
    raw_type = None
    if title in TYPED_TITLES:
        braced = _take_braced(rest)
        if braced is not None:
            raw_type, rest = braced
            rest = rest.strip()
            try:
                type_expr = parse_type(raw_type)
            except TypeExpressionSyntaxError as e:
                logger.debug("unparseable_type", title=title, type=raw_type, error=str(e))

    name = None
    if title in NAMED_TITLES:
        name, optional, rest = _take_name(rest)
        rest = rest.strip()
        if optional and type_expr is not None:
            type_expr = OptionalType(inner=type_expr)

    return Tag(title=title, name=name, type=type_expr, description=rest, raw_type=raw_type)


def parse_comment(body: str) -> list[Tag]:
    """
    Parse a doc comment body into tags.

    Args:
        body: Comment text without the "/*" and "*/" delimiters

    Returns:
        Tags in source order

    Raises:
        MalformedDocCommentError: If the comment holds no tags
    """
    chunks = _split_tags(unwrap(body))
    if not chunks:
        raise MalformedDocCommentError("Comment has no tags")
    return [_parse_tag(chunk) for chunk in chunks]
