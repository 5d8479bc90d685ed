"""UI messages and strings for create-poly-app.

This module consolidates all user-facing messages including:
- Success/error/info messages
- Help text
- Next-step hints shown after a successful scaffold
"""

# =============================================================================
# Project Metadata
# =============================================================================

PROJECT_TAGLINE = "Scaffold a pnpm monorepo from composable features"

# =============================================================================
# Help
# =============================================================================

HELP_TEXT = f"""
[bold cyan]create-poly-app[/bold cyan] - {PROJECT_TAGLINE}

[bold]Commands:[/bold]
  [cyan]create[/cyan]      Generate a new project from answers and features
  [cyan]plan[/cyan]        Show which features and stages would run
  [cyan]features[/cyan]    List the available features
  [cyan]version[/cyan]     Show version information

[bold]Examples:[/bold]
  [dim]# Answer interactively[/dim]
  [dim]$ create-poly-app create my-app[/dim]

  [dim]# Non-interactive, answers from a file[/dim]
  [dim]$ create-poly-app create my-app --answers answers.yaml --no-interactive[/dim]

  [dim]# Preview the plan for a web app with Tailwind[/dim]
  [dim]$ create-poly-app plan my-app --set projectWorkspaces=[react-webapp] -f tailwind[/dim]
"""

NEXT_STEPS = """[bold green]What's Next?[/bold green]

  [cyan]cd {project_name}[/cyan]
  [cyan]pnpm install[/cyan]
"""

# =============================================================================
# Status Messages
# =============================================================================

SUCCESS_MESSAGES = {
    "project_created": "Project '{project_name}' created at {project_root}",
    "plan_resolved": "Resolved {stage_count} stage(s) from {feature_count} feature(s)",
}

ERROR_MESSAGES = {
    "project_exists": "Target directory already exists and is not empty: {project_root}",
    "invalid_set_option": "Invalid --set value '{value}', expected key=value",
    "answers_not_mapping": "Answers file must contain a mapping: {path}",
    "answers_not_found": "Answers file not found: {path}",
    "stage_failed": "Stage '{stage}' of feature '{feature}' failed during {step}",
    "resolve_failed": "Could not build an execution plan",
    "no_stages": "No stages to run for the selected features and answers",
}

INFO_MESSAGES = {
    "creating": "Creating project '{project_name}' with features: {features}",
    "dry_run": "Dry run: nothing will be written",
    "no_rollback": "Files written by completed stages were left in place",
}
