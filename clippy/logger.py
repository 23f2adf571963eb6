# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for the clippy argument parser."""
import logging

logger: logging.Logger = logging.getLogger("clippy")
