"""
Structured logging configuration.

The library itself only creates module loggers; applications call
configure_logging() to get human-readable console output and, optionally,
rotating human and JSON log files. JSON logs include:
- Timestamp
- Level
- Subsystem
- State ID
- Action ID
- Event type
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional


class JSONFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "subsystem"):
            log_data["subsystem"] = record.subsystem
        if getattr(record, "state_id", None):
            log_data["state_id"] = record.state_id
        if getattr(record, "action_id", None):
            log_data["action_id"] = record.action_id
        if getattr(record, "event_type", None):
            log_data["event"] = record.event_type
        if getattr(record, "extra_data", None):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class HumanFormatter(logging.Formatter):
    """Human-readable format with colors."""

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level = record.levelname[:4]

        prefix_parts = [f"{timestamp} {level}"]
        subsystem = getattr(record, "subsystem", "general")
        if subsystem != "general":
            prefix_parts.append(f"[{subsystem}]")
        if getattr(record, "state_id", None):
            prefix_parts.append(f"state={record.state_id}")

        line = f"{' '.join(prefix_parts)}: {record.getMessage()}"

        if self.use_colors and sys.stderr.isatty():
            color = self.COLORS.get(record.levelname, "")
            line = f"{color}{line}{self.RESET}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


class StructuredLogger(logging.Logger):
    """Logger with structured logging methods."""

    def event(
        self,
        event_type: str,
        msg: str,
        state_id: Optional[str] = None,
        action_id: Optional[str] = None,
        subsystem: str = "general",
        **extra,
    ) -> None:
        """Log an event at INFO level with structured fields."""
        if not self.isEnabledFor(logging.INFO):
            return
        self.info(
            msg,
            extra={
                "event_type": event_type,
                "state_id": state_id,
                "action_id": action_id,
                "subsystem": subsystem,
                "extra_data": extra,
            },
        )


def configure_logging(
    level: str = "INFO",
    log_dir: Optional[str] = None,
    json_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files
        json_file: Path for JSON logs (in log_dir if relative)
        max_bytes: Max size per log file
        backup_count: Number of backup files to keep
    """
    logging.setLoggerClass(StructuredLogger)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers = []

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(HumanFormatter())
    root_logger.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        human_handler = RotatingFileHandler(
            os.path.join(log_dir, "qlearner.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        human_handler.setFormatter(HumanFormatter(use_colors=False))
        root_logger.addHandler(human_handler)

        json_path = json_file or "qlearner.json.log"
        if not os.path.isabs(json_path):
            json_path = os.path.join(log_dir, json_path)

        json_handler = RotatingFileHandler(
            json_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        json_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(json_handler)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger."""
    return logging.getLogger(name)  # type: ignore
