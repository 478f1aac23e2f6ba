"""
Environment Variable Handling.

Loads a .env file into os.environ using python-dotenv so that
``${VAR}`` references and DUALDRAFT_* overrides can come from it.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Track whether dotenv has been loaded
_dotenv_loaded: bool = False


def load_environment(env_file: str = ".env") -> bool:
    """Load the .env file once per process.

    Existing environment variables win over values from the file.

    Args:
        env_file: Path to .env file (relative to cwd or absolute)

    Returns:
        True if a .env file was found and loaded, False otherwise
    """
    global _dotenv_loaded

    if _dotenv_loaded:
        return True

    _dotenv_loaded = True
    env_path = Path(env_file)
    if not env_path.exists():
        return False

    load_dotenv(env_path, override=False)
    logger.debug(f"Loaded environment from {env_path}")
    return True


def reset_environment() -> None:
    """Forget that .env was loaded. Useful for testing."""
    global _dotenv_loaded
    _dotenv_loaded = False
