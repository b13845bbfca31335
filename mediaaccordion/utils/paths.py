# mediaaccordion/utils/paths.py
import os
import logging
from urllib.parse import urlparse, unquote

logger = logging.getLogger(__name__)


def get_app_root_path():
    """Gets the root directory of the application."""
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def get_assets_path():
    """Gets the path to the main 'assets' directory."""
    return os.path.join(get_app_root_path(), "assets")


def get_media_path():
    """Gets the path to the 'media' directory inside 'assets'."""
    return os.path.join(get_assets_path(), "media")


def get_pages_path():
    """Gets the path to the 'pages' directory holding accordion page definitions."""
    return os.path.join(get_assets_path(), "pages")


def get_settings_path():
    """Gets the path to the 'settings' directory inside 'assets'."""
    return os.path.join(get_assets_path(), "settings")


def get_settings_file_path(filename: str = "settings.json") -> str:
    """Gets the full path to the settings file."""
    return os.path.join(get_settings_path(), filename)


def get_log_file_path(filename: str = "mediaaccordion.log") -> str:
    """Gets the full path for the application log file in the app root."""
    return os.path.join(get_app_root_path(), filename)


def resolve_media_path(media_url: str | None) -> str | None:
    """
    Turns an item's media URL into a local file path.

    Accepts absolute paths, ``file://`` URLs and paths relative to the
    'media' directory. Remote URLs are never fetched and resolve to None.
    """
    if not media_url:
        return None

    parsed = urlparse(media_url)
    if parsed.scheme == "file":
        return unquote(parsed.path)
    if parsed.scheme and len(parsed.scheme) > 1:
        logger.debug(f"Media URL '{media_url}' is remote; not resolving.")
        return None
    if os.path.isabs(media_url):
        return media_url
    return os.path.join(get_media_path(), media_url)


def ensure_assets_folders_exist():
    """
    Ensures that all necessary asset subdirectories are created.
    This should be called once at application startup.
    """
    paths_to_ensure = [
        get_assets_path(),
        get_media_path(),
        get_pages_path(),
        get_settings_path(),
    ]
    for path in paths_to_ensure:
        try:
            os.makedirs(path, exist_ok=True)
            logger.debug(f"Ensured asset folder exists: {path}")
        except OSError as e:
            logger.error(f"Could not create asset folder {path}: {e}", exc_info=True)
