"""Codemods for vite.config.ts."""

import logging
from pathlib import Path

from tree_sitter import Node

from create_poly_app.codemods.base import read_text_or_empty
from create_poly_app.codemods.syntax import (
    Edit,
    apply_edits,
    followed_by_comma,
    node_text,
    parse,
    significant_children,
    unquote,
    walk,
)
from create_poly_app.constants import TAILWIND_VITE_PLUGIN_MODULE, TAILWIND_VITE_PLUGIN_NAME
from create_poly_app.exceptions import CodeModError
from create_poly_app.utils import write_file

logger = logging.getLogger(__name__)

DEFAULT_VITE_CONFIG = """import { defineConfig } from 'vite'

export default defineConfig({})
"""

DEFAULT_INDENT = "  "


def _default_import_name(tree_root: Node, module: str) -> str | None:
    """Local name of the default import of module, if there is one."""
    for statement in tree_root.children:
        if statement.type != "import_statement":
            continue
        source = statement.child_by_field_name("source")
        if source is None or unquote(node_text(source)) != module:
            continue
        for child in statement.named_children:
            if child.type == "import_clause":
                for part in child.named_children:
                    if part.type == "identifier":
                        return node_text(part)
    return None


def _import_edit(tree_root: Node, local_name: str, module: str) -> Edit:
    imports = [child for child in tree_root.children if child.type == "import_statement"]
    if not imports:
        return Edit.insert(0, f"import {local_name} from '{module}'\n")
    last = imports[-1]
    semicolon = ";" if node_text(last).rstrip().endswith(";") else ""
    return Edit.insert(last.end_byte, f"\nimport {local_name} from '{module}'{semicolon}")


def _find_config_object(tree_root: Node) -> Node | None:
    """The object literal passed to defineConfig, or a bare default export."""
    for node in walk(tree_root):
        if node.type != "call_expression":
            continue
        function = node.child_by_field_name("function")
        if function is None or node_text(function) != "defineConfig":
            continue
        arguments = node.child_by_field_name("arguments")
        if arguments is None:
            continue
        for argument in significant_children(arguments):
            if argument.type == "object":
                return argument

    for statement in tree_root.children:
        if statement.type == "export_statement":
            for child in significant_children(statement):
                if child.type == "object":
                    return child
    return None


def _property(obj: Node, name: str) -> Node | None:
    for child in significant_children(obj):
        if child.type != "pair":
            continue
        key = child.child_by_field_name("key")
        if key is not None and unquote(node_text(key)) == name:
            return child
    return None


def _calls_plugin(array: Node, plugin: str) -> bool:
    for element in significant_children(array):
        if element.type == "call_expression":
            function = element.child_by_field_name("function")
            if function is not None and node_text(function) == plugin:
                return True
        elif element.type == "identifier" and node_text(element) == plugin:
            return True
    return False


def _indent_of(node: Node) -> str:
    return " " * node.start_point[1]


def _plugin_edit(config: Node, plugin_call: str, plugin: str) -> Edit | None:
    pair = _property(config, "plugins")
    if pair is None:
        members = significant_children(config)
        if not members:
            return Edit.insert(config.start_byte + 1, f"\n{DEFAULT_INDENT}plugins: [{plugin_call}],\n")
        last = members[-1]
        indent = _indent_of(members[0]) or DEFAULT_INDENT
        comma = followed_by_comma(last)
        if comma is not None:
            return Edit.insert(comma.end_byte, f"\n{indent}plugins: [{plugin_call}],")
        return Edit.insert(last.end_byte, f",\n{indent}plugins: [{plugin_call}]")

    value = pair.child_by_field_name("value")
    if value is None:
        raise CodeModError("plugins property has no value")
    if value.type != "array":
        return Edit(value.start_byte, value.end_byte, f"[...{node_text(value)}, {plugin_call}]")
    if _calls_plugin(value, plugin):
        return None

    elements = significant_children(value)
    if not elements:
        return Edit.insert(value.start_byte + 1, plugin_call)
    last = elements[-1]
    comma = followed_by_comma(last)
    if comma is not None:
        return Edit.insert(comma.end_byte, f" {plugin_call}")
    return Edit.insert(last.end_byte, f", {plugin_call}")


def add_vite_plugin(file_path: Path, module: str, local_name: str) -> None:
    """Import a Vite plugin's default export and register ``name()`` in plugins.

    Args:
        file_path: vite.config.ts path (a minimal config is created if missing)
        module: Module to import the plugin from
        local_name: Binding used when the import has to be added

    Raises:
        CodeModError: If no config object can be found
    """
    source = read_text_or_empty(file_path) or DEFAULT_VITE_CONFIG
    source_bytes = source.encode("utf8")
    root = parse(source_bytes, "typescript").root_node
    if root.has_error:
        raise CodeModError("Could not parse Vite config", path=file_path)

    config = _find_config_object(root)
    if config is None:
        raise CodeModError("No defineConfig({...}) object found", path=file_path)

    edits: list[Edit] = []
    name = _default_import_name(root, module)
    if name is None:
        name = local_name
        edits.append(_import_edit(root, name, module))

    plugin_edit = _plugin_edit(config, f"{name}()", name)
    if plugin_edit is not None:
        edits.append(plugin_edit)

    if not edits and file_path.exists():
        logger.debug(f"{file_path} already registers {module}")
        return

    write_file(file_path, apply_edits(source_bytes, edits).decode("utf8"))
    logger.info(f"Registered {module} in {file_path}")


def add_vite_config(file_path: Path) -> None:
    """Register the Tailwind Vite plugin."""
    add_vite_plugin(file_path, TAILWIND_VITE_PLUGIN_MODULE, TAILWIND_VITE_PLUGIN_NAME)
