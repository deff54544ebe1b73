"""Calculate times to events for every analysis in the config. config template: time_to_event.yaml"""

import logging

from eventtiming.functional.setup.args import get_args
from eventtiming.main.helper.time_to_event import (
    get_analysis_configs,
    get_date_columns,
    load_data,
    run_analyses,
)
from eventtiming.modules.setup.config import load_config
from eventtiming.modules.setup.directory import DirectoryPreparer

CONFIG_PATH = "./eventtiming/configs/time_to_event.yaml"


def main(config_path: str):
    cfg = load_config(config_path)
    analysis_cfgs = get_analysis_configs(cfg)  # fail on bad config before touching disk

    DirectoryPreparer(cfg).setup_time_to_event()

    logger = logging.getLogger("time_to_event")
    logger.info(f"Starting time to event for {len(analysis_cfgs)} analyses")

    data = load_data(cfg.paths.data, get_date_columns(analysis_cfgs))
    logger.info(f"Loaded {len(data)} rows from {cfg.paths.data}")

    run_analyses(data, analysis_cfgs, cfg.paths.results, logger)
    logger.info("Finish time to event")
    logger.info("Done")


if __name__ == "__main__":
    args = get_args(CONFIG_PATH)
    main(args.config_path)
