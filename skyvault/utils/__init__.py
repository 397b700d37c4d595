"""
Utilities for SkyVault.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from skyvault.utils.logging import disable_logging, get_logger

__all__ = ["disable_logging", "get_logger"]
