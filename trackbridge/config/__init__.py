"""Configuration module for trackbridge.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

Settings: Settings class
    Build a fresh instance, e.g. with explicit overrides in tests

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

resilient_operation(operation_name: str)
    Decorator for logging errors in external API calls

Usage:
------
```python
from trackbridge.config import settings
host = settings.lavalink.host

from trackbridge.config import get_logger
logger = get_logger(__name__)
logger.info("Starting operation")
```
"""

from .logging import get_logger, resilient_operation, setup_loguru_logger
from .settings import Settings, settings

# Public API
__all__ = [
    "Settings",
    # Logging
    "get_logger",
    "resilient_operation",
    "settings",
    "setup_loguru_logger",
]
