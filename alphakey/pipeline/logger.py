"""
PipelineLogger: Structured JSON logging for background removal pipeline
"""

import json
import logging
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Any, Deque, Dict, Optional


class PipelineLogger:
    """Logger with a per-run JSON record and debug/verbose console echo"""

    def __init__(
        self,
        log_file: Optional[Path] = None,
        debug_mode: bool = False,
        verbose: bool = False,
        max_records: int = 100,
    ):
        self.log_file = log_file or Path.home() / ".local/share/alphakey/debug.log"
        self.debug_mode = debug_mode
        self.verbose = verbose
        self.current_image: Optional[Dict[str, Any]] = None
        # Most recent run records only
        self.logs: Deque[Dict[str, Any]] = deque(maxlen=max_records)

        # Setup Python logger
        self.logger = logging.getLogger("alphakey.pipeline")
        self.logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    def start_image(self, source: Any):
        """Start logging for a new image"""
        self.current_image = {
            "image": str(source),
            "timestamp": datetime.now().isoformat(),
            "stages": [],
        }

    def log_stage(self, stage_name: str, **data: Any):
        """Append a stage record to the current image log"""
        if self.current_image is None:
            raise RuntimeError("Must call start_image() before logging stages")

        stage_log = {
            "stage": stage_name,
            "timestamp": datetime.now().isoformat(),
            **data,
        }
        self.current_image["stages"].append(stage_log)
        self.logger.debug("%s: %s", stage_name, data)

        if self.debug_mode:
            print(f"[{stage_name}] {json.dumps(data, indent=2)}")

    def log_info(self, message: str):
        """Log info message"""
        self.logger.info(message)
        if self.verbose:
            print(f"INFO: {message}")

    def log_warning(self, message: str):
        """Log warning message"""
        self.logger.warning(message)
        print(f"WARNING: {message}")

    def log_error(self, message: str, exc_info: bool = False):
        """Log error message"""
        self.logger.error(message, exc_info=exc_info)
        print(f"ERROR: {message}")

    def finish_image(self) -> Optional[Dict[str, Any]]:
        """Close the current image log and keep it in memory"""
        record = self.current_image
        if record is not None:
            self.logs.append(record)
        self.current_image = None
        return record

    def save_image_log(self):
        """Close the current image log and append it to the log file"""
        record = self.finish_image()
        if record is None:
            return

        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.log_file, "a") as f:
            json.dump(record, f)
            f.write("\n")
