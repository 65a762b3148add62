"""Shared logger for the meeting_scheduler package."""

from __future__ import annotations

import logging

LOGGER_NAME = "meeting_scheduler"


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return the package logger (or a child of it).

    A console handler at INFO level is attached the first time the package
    logger is requested without any handler configured.
    """
    root = logging.getLogger(LOGGER_NAME)

    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(logging.INFO)

    if name:
        return root.getChild(name)
    return root


def set_log_level(level: str) -> None:
    get_logger().setLevel(level.upper())
