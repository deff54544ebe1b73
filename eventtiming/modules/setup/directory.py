import logging
import os
from os.path import join

import yaml

from eventtiming.constants.config import DATA, LOGGING, PATHS, RESULTS
from eventtiming.constants.paths import TIME_TO_EVENT_CFG
from eventtiming.modules.setup.config import Config

logger = logging.getLogger(__name__)  # Get the logger for this module

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class DirectoryPreparer:
    """Validates input paths and prepares output directories and logging."""

    def __init__(self, cfg: Config) -> None:
        self.cfg = cfg
        if PATHS not in self.cfg:
            raise ValueError("Config must have a 'paths' section")

    def setup_logging(self, name: str) -> None:
        """
        Logs to the console and, if cfg.logging.path is set, to <path>/<name>.log.
        """
        log_cfg = self.cfg.get(LOGGING, None) or Config()
        level = getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO)
        handlers = [logging.StreamHandler()]
        log_dir = log_cfg.get("path", None)
        if log_dir is not None:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(join(log_dir, f"{name}.log")))
        logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

    def check_file(self, path_key: str) -> str:
        """Checks that the file given in cfg.paths[path_key] exists."""
        path = self.cfg.paths.get(path_key, None)
        if path is None:
            raise ValueError(f"paths.{path_key} must be set in the config")
        if not os.path.isfile(path):
            raise FileNotFoundError(f"paths.{path_key} ({path}) does not exist")
        return path

    def create_directory(self, path_key: str) -> str:
        """Creates the directory given in cfg.paths[path_key]."""
        path = self.cfg.paths.get(path_key, None)
        if path is None:
            raise ValueError(f"paths.{path_key} must be set in the config")
        os.makedirs(path, exist_ok=True)
        return path

    def write_config(self, target: str, name: str) -> None:
        """Writes the config to the directory given in cfg.paths[target]."""
        with open(join(self.cfg.paths[target], name), "w") as f:
            yaml.dump(self.cfg.to_dict(), f, sort_keys=False)

    def setup_time_to_event(self) -> None:
        """
        Validates path config and sets up directories for time_to_event.
        """
        # Setup logging
        self.setup_logging("time_to_event")

        # Validate and create directories
        self.check_file(DATA)
        self.create_directory(RESULTS)

        # Write config in output directory.
        self.write_config(RESULTS, name=TIME_TO_EVENT_CFG)
