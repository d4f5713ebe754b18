"""
Task Manager - main entry point.

Runs the API under uvicorn with host/port from settings.
"""

from __future__ import annotations

import uvicorn

from taskmanager.config import get_settings
from taskmanager.logging_setup import setup_logging


def main():
    """Main entry point."""
    settings = get_settings()
    setup_logging(level=settings.log_level, log_dir=settings.log_dir or None)
    
    uvicorn.run(
        "taskmanager.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
