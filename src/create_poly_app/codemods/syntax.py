"""Tree-sitter helpers shared by the source codemods."""

from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache

import tree_sitter_css
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

LANGUAGES = {
    "css": tree_sitter_css.language,
    "typescript": tree_sitter_typescript.language_typescript,
}


@lru_cache(maxsize=None)
def get_parser(language: str) -> Parser:
    """Get a parser for one of the supported languages."""
    return Parser(Language(LANGUAGES[language]()))


def parse(source: bytes, language: str) -> Tree:
    return get_parser(language).parse(source)


def node_text(node: Node) -> str:
    return node.text.decode("utf8") if node.text is not None else ""


def unquote(text: str) -> str:
    """Strip one level of matching quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


def walk(node: Node) -> Iterator[Node]:
    """Depth-first pre-order traversal."""
    yield node
    for child in node.children:
        yield from walk(child)


def significant_children(node: Node) -> list[Node]:
    """Named children other than comments."""
    return [child for child in node.named_children if child.type != "comment"]


def followed_by_comma(node: Node) -> Node | None:
    """Return the comma token right after node, if any."""
    sibling = node.next_sibling
    if sibling is not None and sibling.type == ",":
        return sibling
    return None


@dataclass(frozen=True)
class Edit:
    """Replace source bytes [start, end) with text."""

    start: int
    end: int
    text: str

    @classmethod
    def insert(cls, offset: int, text: str) -> "Edit":
        return cls(offset, offset, text)


def apply_edits(source: bytes, edits: list[Edit]) -> bytes:
    """Apply non-overlapping edits, last offset first."""
    result = source
    for edit in sorted(edits, key=lambda e: (e.start, e.end), reverse=True):
        result = result[: edit.start] + edit.text.encode("utf8") + result[edit.end :]
    return result
