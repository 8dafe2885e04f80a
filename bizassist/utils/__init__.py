"""
Utilities - logging setup and error types
"""

from bizassist.utils.logger import setup_logger
from bizassist.utils.errors import (
    AssistantError,
    HostedModelError,
    HostedModelQuotaError,
    StorageError,
    ValidationError,
)

__all__ = [
    "AssistantError",
    "HostedModelError",
    "HostedModelQuotaError",
    "StorageError",
    "ValidationError",
    "setup_logger",
]
