"""CLI commands for create-poly-app."""

from create_poly_app.commands.create_cmd import create_command, plan_command
from create_poly_app.commands.features_cmd import features_command

__all__ = [
    "create_command",
    "features_command",
    "plan_command",
]
