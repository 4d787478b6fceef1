"""Entry point of the shows_api package. Allows python -m shows_api."""

import argparse
import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError


def run_api() -> None:
    """Start the FastAPI server."""
    import uvicorn

    from shows_api.settings import settings

    print(f"Starting Shows API on {settings.api.host}:{settings.api.port}")
    uvicorn.run(
        "shows_api.api.main:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )


def run_init_database() -> None:
    """Create the shows table if it is missing."""
    from shows_api.database.connection import init_database
    from shows_api.settings import settings

    asyncio.run(init_database(settings.database))
    print("Shows table ready")


def main(argv: list[str] | None = None) -> None:
    """Main CLI."""
    parser = argparse.ArgumentParser(
        description="Shows API - REST resource for shows with image uploads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m shows_api serve                # FastAPI server
  python -m shows_api init-db              # Create the shows table
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")
    subparsers.add_parser("serve", help="Run the API server")
    subparsers.add_parser("init-db", help="Create the shows table")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "serve":
            run_api()
        elif args.command == "init-db":
            run_init_database()

    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)
    except (SQLAlchemyError, OSError) as e:
        print(f"\nERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
