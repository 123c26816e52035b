"""Utility modules for Plantilla.

Provides:
- logger: get_logger for logging
"""

from plantilla.utils.logger import get_logger

__all__ = ["get_logger"]
