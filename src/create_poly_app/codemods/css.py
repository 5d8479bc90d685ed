"""Stylesheet codemods."""

import logging
from pathlib import Path

from tree_sitter import Node

from create_poly_app.codemods.base import read_text_or_empty
from create_poly_app.codemods.syntax import Edit, apply_edits, node_text, parse, unquote, walk
from create_poly_app.constants import TAILWIND_IMPORT_SOURCE
from create_poly_app.utils import write_file

logger = logging.getLogger(__name__)

INLINE_WHITESPACE = b" \t"


def _import_target(node: Node) -> str | None:
    """Module named by an ``@import`` statement, for both string and url() forms."""
    for child in walk(node):
        if child.type in ("string_value", "plain_value"):
            return unquote(node_text(child).strip())
    return None


def has_css_import(source: str, target: str) -> bool:
    """Whether the stylesheet already imports target.

    Statements recovered inside error nodes count. Text in comments does not.
    """
    tree = parse(source.encode("utf8"), "css")
    return any(
        node.type == "import_statement" and _import_target(node) == target
        for node in walk(tree.root_node)
    )


def _line_gap_end(source: bytes, offset: int) -> int:
    """End of the spaces and tabs after offset, including one line break."""
    end = offset
    while end < len(source) and source[end] in INLINE_WHITESPACE:
        end += 1
    if source.startswith(b"\r\n", end):
        return end + 2
    if source.startswith(b"\n", end):
        return end + 1
    return end


def _import_edit(source: bytes, root: Node, statement: str) -> Edit:
    """Place statement on its own line at the top of the stylesheet.

    A leading ``@charset`` must stay first, so the statement follows it.
    The whitespace the statement replaces collapses into single line breaks.
    """
    first = root.children[0] if root.children else None
    if first is not None and first.type == "charset_statement":
        return Edit(first.end_byte, _line_gap_end(source, first.end_byte), f"\n{statement}\n")
    leading = len(source) - len(source.lstrip())
    return Edit(0, leading, f"{statement}\n")


def add_css_import(file_path: Path, target: str) -> None:
    """Prepend ``@import "<target>";`` unless the stylesheet already has it.

    The import goes before every rule and other import, but after a leading
    ``@charset``. A missing file is treated as empty.
    """
    source = read_text_or_empty(file_path)
    if has_css_import(source, target):
        logger.debug(f"{file_path} already imports {target}")
        return

    source_bytes = source.encode("utf8")
    root = parse(source_bytes, "css").root_node
    if root.has_error:
        logger.warning(f"{file_path} has syntax errors, inserting import anyway")

    edit = _import_edit(source_bytes, root, f'@import "{target}";')
    write_file(file_path, apply_edits(source_bytes, [edit]).decode("utf8"))
    logger.info(f"Added @import {target} to {file_path}")


def add_tailwind_import(file_path: Path) -> None:
    """Wire Tailwind into a stylesheet with ``@import "tailwindcss";``."""
    add_css_import(file_path, TAILWIND_IMPORT_SOURCE)
