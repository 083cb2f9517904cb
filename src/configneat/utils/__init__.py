"""Utility modules for ConfigNeat.

Provides:
- logger: get_logger for logging
"""

from configneat.utils.logger import get_logger

__all__ = ["get_logger"]
