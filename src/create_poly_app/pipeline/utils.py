"""Utility functions for pipeline steps and reports."""


def format_count_message(
    action: str,
    succeeded: int,
    failed: int,
    item_name: str = "item",
) -> str:
    """Format a message for completed processing with success/failure counts.

    Args:
        action: Past tense action verb (e.g., "Wrote", "Applied")
        succeeded: Number of successful items
        failed: Number of failed items
        item_name: Singular name for items (e.g., "file", "codemod")

    Returns:
        Formatted message string

    Example:
        >>> format_count_message("Wrote", 5, 0, "file")
        'Wrote 5 file(s)'
        >>> format_count_message("Completed", 3, 1, "stage")
        'Completed 3 stage(s), 1 failed'
    """
    plural = f"{item_name}(s)"

    if failed > 0:
        return f"{action} {succeeded} {plural}, {failed} failed"
    return f"{action} {succeeded} {plural}"
