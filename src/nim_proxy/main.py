"""Main application entry point"""

import uvicorn

from .api import create_app
from .core import load_config


def main():
    """Run the application"""
    config = load_config()

    uvicorn.run(
        create_app(config),
        host=config.system.host,
        port=config.system.port,
        log_level=config.system.log_level.lower()
    )


if __name__ == "__main__":
    main()
