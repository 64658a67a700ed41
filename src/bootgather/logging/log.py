# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/logging/log.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
import uuid

from bootgather.state.terraform import state_path

LOG_FILE_NAME = ".bootgather.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(message)s"


def _replace_handlers(logger: logging.Logger, *handlers: logging.Handler) -> None:
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)


def init_logging(
    directory: Path,
    *,
    verbose: bool = False,
    run_id: Optional[str] = None,
    name: str = "bootgather",
) -> tuple[logging.Logger, str, Path]:
    """
    Log a gather run for the installation in *directory*.

    The full DEBUG trace is appended to <directory>/.bootgather.log so
    repeated attempts share one file; the console gets INFO (DEBUG when
    verbose). The first lines of each run record the run id, the install
    directory and whether a state file was found there.
    """
    run_id = run_id or str(uuid.uuid4())
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / LOG_FILE_NAME

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.setFormatter(formatter)

    _replace_handlers(logger, fh, ch)

    tfstate = state_path(directory)
    logger.debug("--- gather bootstrap run %s ---", run_id)
    logger.debug("install_dir=%s", directory.resolve())
    logger.debug("state_file=%s (%s)", tfstate, "present" if tfstate.is_file() else "absent")

    return logger, run_id, log_path
