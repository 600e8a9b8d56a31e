"""
CLI entry point for the launch pad bookings service.

Usage:
    python -m launchpad_bookings --port 8080
    launchpad-bookings --database-url sqlite:///bookings.db
"""

import argparse
import os


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Launch pad bookings service",
        prog="launchpad-bookings",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Server host (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("REST_PORT", "8080")),
        help="Server port (default: $REST_PORT or 8080)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy database URL (default: $DATABASE_URL or DB_* variables)",
    )
    parser.add_argument(
        "--spacex-api-url",
        default=None,
        help="SpaceX API base URL (default: $SPACEX_API_URL or the public v4 API)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    import uvicorn

    from launchpad_bookings.database import DatabaseConfig, configure_database
    from launchpad_bookings.logging_config import LogConfig, setup_logging
    from launchpad_bookings.main import app
    from launchpad_bookings.spacex import SpaceXConfig

    setup_logging(LogConfig(log_level=args.log_level))

    if args.database_url:
        configure_database(DatabaseConfig(args.database_url))
    app.state.spacex_config = SpaceXConfig(base_url=args.spacex_api_url)

    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
