import os
import logging
from pathlib import Path
from typing import Optional
from platformdirs import user_config_dir
from .core.config import ConfigManager, EditorConfig


logger = logging.getLogger(__name__)


CONFIG_DIR = Path(user_config_dir("vectorgraph"))
CONFIG_FILE = CONFIG_DIR / "config.yaml"


def getflag(name, default=False):
    default = "true" if default else "false"
    return os.environ.get(name, default).lower() in ("true", "1")


# Initialized to None so that importing this module has no side effects.
# The application must call initialize_managers() to populate them.
config_mgr: Optional[ConfigManager] = None
config: Optional[EditorConfig] = None  # Alias for config_mgr.config


def initialize_managers(config_file: Optional[Path] = None):
    """
    Loads the user configuration. Meant to be called once by the
    application; further calls do nothing.
    """
    global config_mgr, config

    if config is not None:
        return

    # VECTORGRAPH_NO_CONFIG keeps the editor on built-in defaults, which
    # is what batch runs want.
    if getflag("VECTORGRAPH_NO_CONFIG"):
        logger.info("User configuration disabled, using defaults")
        config = EditorConfig()
        return

    path = config_file or CONFIG_FILE
    logger.info(f"Initializing configuration from {path}")
    config_mgr = ConfigManager(path)
    config = config_mgr.config
