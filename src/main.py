"""
Government Watchdog - Main application entry point.

Serves the transparency dashboard API over public government records:
legislators, bills, federal spending and lobbying disclosures.

Usage:
    python src/main.py                 start the API server
    python src/main.py -seed <source>  load seed data and exit
"""

import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from gov_watchdog.config.logging import get_logger
from gov_watchdog.config.settings import get_settings
from gov_watchdog.seed import SeedSource, reseed
from gov_watchdog.utils.config import initialize_application


def main() -> None:
    """Main application entry point."""
    initialize_application()

    logger = get_logger(__name__)
    settings = get_settings()

    if "-seed" in sys.argv:
        try:
            source = SeedSource(sys.argv[sys.argv.index("-seed") + 1])
        except (IndexError, ValueError) as e:
            logger.error("Invalid seed command", error=str(e))
            choices = ", ".join(s.value for s in SeedSource)
            print(f"Error: -seed expects one of: {choices}")
            sys.exit(1)

        result = reseed(source)
        print(result.message)
        for collection, rows in result.counts.items():
            print(f"  {collection}: {rows} rows")
        sys.exit(0 if result.success else 1)

    logger.info(
        "Starting API server",
        host=settings.endpoint_host,
        port=settings.endpoint_port,
        environment=settings.environment,
    )

    try:
        uvicorn.run(
            "gov_watchdog.webapi.app:app",
            host=settings.endpoint_host,
            port=settings.endpoint_port,
            reload=settings.api_reload,
            log_level=settings.api_log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
        print("\nShutting down...")


if __name__ == "__main__":
    main()
