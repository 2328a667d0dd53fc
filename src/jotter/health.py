"""
Health check module for Jotter.

Reports the state of the data file and configuration.
"""

from jotter.config import DEFAULT_MAX_NOTES, get_config_path, get_data_file_path, load_config


def check_data_file() -> tuple[str, str]:
    """Check data file status."""
    from jotter.codec import load_from_file
    from jotter.errors import NoteError

    data_path = get_data_file_path()
    if not data_path.exists():
        return "✓", f"Not created yet ({data_path})"

    try:
        result = load_from_file(data_path)
    except NoteError as e:
        return "✗", f"Error: {e}"

    if result.skipped:
        return "!", f"{result.loaded} notes, {len(result.skipped)} unreadable records"
    return "✓", f"OK ({result.loaded} notes)"


def check_capacity() -> tuple[str, str]:
    """Check how full the store is."""
    from jotter.codec import load_from_file
    from jotter.errors import NoteError

    config = load_config()
    capacity = int(config.get("notes", {}).get("max_notes", DEFAULT_MAX_NOTES))

    try:
        result = load_from_file(get_data_file_path(config), capacity=capacity)
    except NoteError:
        return "-", "N/A"

    used = result.loaded
    if used >= capacity:
        return "!", f"Full ({used}/{capacity})"
    return "✓", f"{used}/{capacity} used"


def check_config() -> tuple[str, str]:
    """Check config file status."""
    config_path = get_config_path()
    if not config_path.exists():
        return "-", "Using defaults"

    try:
        load_config()
    except Exception as e:
        return "✗", f"Error: {e}"
    return "✓", f"OK ({config_path})"


def run_health_check() -> dict[str, tuple[str, str]]:
    """Run all health checks."""
    return {
        "Data file": check_data_file(),
        "Capacity": check_capacity(),
        "Config": check_config(),
    }


def format_health_report(checks: dict[str, tuple[str, str]]) -> str:
    """Format health check results."""
    lines = ["Jotter Health Check", "-" * 40]

    for name, (status, message) in checks.items():
        lines.append(f"{status} {name}: {message}")

    return "\n".join(lines)
