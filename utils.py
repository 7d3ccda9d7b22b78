# utils.py
"""
Utility functions for the network background.

Logging setup and JSON file helpers used by the entry point and the theme
controller. Nothing in here knows about particles or rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary with an optional "logging" key holding
#       "level", "format" and "log_file". A log_file of null disables the
#       file handler.
#   - Side Effects: Replaces the root logger's handlers with a console
#     handler and, if configured, a rotating file handler (1MB x 5).
#
# load_json(path: str) -> Any / save_json(path: str, data: Any) -> None:
#   - Plain JSON read/write. save_json creates missing parent directories.

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/network.log'


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from a configuration dictionary.
    """
    log_config = config.get('logging', {})
    log_level = str(log_config.get('level', 'INFO')).upper()
    formatter = logging.Formatter(log_config.get('format', DEFAULT_LOG_FORMAT))
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicate lines on re-initialization
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024*1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level {log_level}, log file: {log_file_path or 'disabled'}")


def load_json(path: str) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_json(path: str, data: Any) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)


def load_config(path: str) -> Dict[str, Any]:
    """Loads the JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        config = load_json(path)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise
    if not isinstance(config, dict):
        msg = f"Configuration in {path} must be a JSON object."
        logging.error(msg)
        raise ValueError(msg)
    logging.info("Configuration loaded successfully.")
    return config
