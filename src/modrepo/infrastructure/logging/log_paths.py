"""Log file locations for modrepo."""

from pathlib import Path

import platformdirs


def get_log_dir() -> Path:
    """Get the system-appropriate log directory for modrepo.

    Returns:
        Path to the log directory (created if it doesn't exist)
        - Windows: %LOCALAPPDATA%/modrepo/Logs
        - macOS: ~/Library/Logs/modrepo
        - Linux: ~/.local/state/modrepo/log
    """
    log_dir = Path(platformdirs.user_log_dir("modrepo", appauthor=False))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_main_log_path() -> Path:
    return get_log_dir() / "modrepo.log"
