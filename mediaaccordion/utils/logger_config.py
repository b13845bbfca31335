# mediaaccordion/utils/logger_config.py
import logging
import logging.config
import os
from .paths import get_log_file_path

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = '%(asctime)s - %(name)s - [%(levelname)s] - %(message)s'


def build_logging_config(log_level_str=DEFAULT_LOG_LEVEL, log_file_path=None):
    """
    Builds the dictConfig mapping for the application.

    Args:
        log_level_str (str): Name of the level applied to every handler.
        log_file_path (str, optional): Enables a rotating file handler when given.

    Returns:
        dict: A configuration accepted by logging.config.dictConfig.
    """
    numeric_level = getattr(logging, str(log_level_str).upper(), logging.INFO)

    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': numeric_level,
            'formatter': 'standard',
            'stream': 'ext://sys.stdout'
        }
    }
    if log_file_path:
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': numeric_level,
            'formatter': 'standard',
            'filename': log_file_path,
            'maxBytes': 1024 * 1024 * 5,  # 5 MB
            'backupCount': 2,
            'encoding': 'utf-8'
        }

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': LOG_FORMAT,
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
        },
        'handlers': handlers,
        'root': {
            'handlers': list(handlers),
            'level': numeric_level,
        },
        'loggers': {
            # The observer polls several times a second; keep it out of DEBUG noise.
            'mediaaccordion.accordion.visibility_registry': {
                'level': max(numeric_level, logging.INFO),
            }
        }
    }


def setup_logging(settings_manager=None):
    """
    Sets up the application-wide logging configuration.
    Reads log level and file logging settings from the given SettingsManager.
    """
    if settings_manager is None:
        from ..settings.settings_manager import SettingsManager
        settings_manager = SettingsManager()

    log_level_str = settings_manager.get_setting("log_level", DEFAULT_LOG_LEVEL)
    log_to_file = settings_manager.get_setting("log_to_file", False)
    log_file_path = settings_manager.get_setting("log_file_path") or get_log_file_path()
    if log_to_file and not os.path.isabs(log_file_path):
        log_file_path = get_log_file_path(log_file_path)

    if log_to_file:
        log_dir = os.path.dirname(log_file_path)
        if log_dir and not os.path.exists(log_dir):
            try:
                os.makedirs(log_dir, exist_ok=True)
            except OSError as e:
                logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
                logging.error(f"Could not create log directory {log_dir}: {e}. File logging disabled.")
                log_to_file = False

    config = build_logging_config(log_level_str, log_file_path if log_to_file else None)
    try:
        logging.config.dictConfig(config)
        logging.info(f"Logging initialized. Level: {log_level_str}, File Logging: {log_to_file}" + (
            f", Log File: {log_file_path}" if log_to_file else ""))
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        logging.basicConfig(level=config['root']['level'], format=LOG_FORMAT)
        logging.exception(f"Error configuring logging with dictConfig: {e}. Fell back to basicConfig.")
