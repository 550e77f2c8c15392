"""Run a toy long-lived server that logs through serverlog."""

from __future__ import annotations

import time

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

from serverlog.config import LoggerConfig
from serverlog.log import start_logger
from serverlog.utils.logging import setup_logging


@hydra.main(config_path="../configs", config_name="serverlog", version_base=None)
def main(cfg: DictConfig) -> None:
    setup_logging(level=cfg.diagnostics.level)

    logger_cfg = OmegaConf.to_container(cfg.logger, resolve=True)  # type: ignore[assignment]
    assert isinstance(logger_cfg, dict)
    # Hydra may change CWD, so pin relative paths to the launch directory
    for key in ("log_directory", "file_path"):
        if logger_cfg.get(key):
            logger_cfg[key] = to_absolute_path(logger_cfg[key])

    log = start_logger(LoggerConfig.from_config(logger_cfg))
    log.startup("Server listening on port:", cfg.demo.port)
    for beat in range(cfg.demo.heartbeats):
        time.sleep(cfg.demo.heartbeat_seconds)
        log.generalf("heartbeat %d of %d", beat + 1, cfg.demo.heartbeats)
    log.general("shutting down")
    log.flush()
    log.kill()
    log.join(timeout=1.0)


if __name__ == "__main__":
    main()
