"""Utility helpers for create-poly-app."""

from create_poly_app.utils.console import (
    get_console,
    print_error,
    print_header,
    print_info,
    print_panel,
    print_success,
    print_warning,
)
from create_poly_app.utils.file_utils import (
    copy_file,
    ensure_dir,
    is_dir_empty,
    normalize_relative,
    read_file,
    write_file,
)
from create_poly_app.utils.template_utils import (
    substitute_in_value,
    substitute_tokens,
)

__all__ = [
    "copy_file",
    "ensure_dir",
    "get_console",
    "is_dir_empty",
    "normalize_relative",
    "print_error",
    "print_header",
    "print_info",
    "print_panel",
    "print_success",
    "print_warning",
    "read_file",
    "substitute_in_value",
    "substitute_tokens",
    "write_file",
]
