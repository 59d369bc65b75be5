"""Utility functions for file and directory management in feedsmith."""

from pathlib import Path

STATE_DIR_NAME = '.feedsmith'


def get_project_root() -> Path:
    """Find the project root by searching upwards from the Current Working Directory.

    Stops at the first directory containing a marker file.
    """
    current_path = Path.cwd()

    markers = {'.git', 'pyproject.toml', STATE_DIR_NAME, 'requirements.txt'}

    for parent in [current_path] + list(current_path.parents):
        if any((parent / marker).exists() for marker in markers):
            return parent

    # No markers found (e.g. running in /tmp)
    return current_path


def get_state_path() -> Path:
    """Return the path to the .feedsmith directory."""
    return get_project_root() / STATE_DIR_NAME


def get_logs_path() -> Path:
    """Return the path to the logs directory in .feedsmith."""
    return get_state_path() / 'logs'


def init_feedsmith(storage_name: str = 'feeds') -> Path:
    """Initialize the .feedsmith directory and return the storage path.

    Args:
        storage_name: Name of the storage sub-directory to create.

    Returns:
        Path to the created (or existing) storage directory.

    """
    state_dir = get_state_path()
    storage_dir = state_dir / storage_name

    storage_dir.mkdir(parents=True, exist_ok=True)
    get_logs_path().mkdir(parents=True, exist_ok=True)

    # Keep generated state out of source control
    gitignore = state_dir / '.gitignore'
    if not gitignore.exists():
        gitignore.write_text('# Automatically created by feedsmith\n*\n')

    return storage_dir


def normalize_source_url(url: str) -> str:
    """Strip the URL and add an https scheme when none is given.

    Args:
        url: URL as typed by the user

    Returns:
        The URL with a scheme.

    """
    url = url.strip()
    if not url.startswith(('http://', 'https://')):
        return 'https://' + url
    return url
