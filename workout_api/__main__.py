"""Command line entry point: ``python -m workout_api``."""

import argparse
import os

import uvicorn


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="workout_api", description="Run the Workout API server.")
    parser.add_argument("--host", help="interface to bind (default: HOST setting)")
    parser.add_argument("--port", type=int, help="port to listen on (default: PORT setting)")
    parser.add_argument("--database-url", help="SQLAlchemy connection string (default: DATABASE_URL setting)")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)

    # Flags win over the environment; settings are read when the app module is imported
    if args.database_url:
        os.environ["DATABASE_URL"] = args.database_url
    if args.host:
        os.environ["HOST"] = args.host
    if args.port:
        os.environ["PORT"] = str(args.port)

    from workout_api.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "workout_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        timeout_keep_alive=60,
    )


if __name__ == "__main__":
    main()
