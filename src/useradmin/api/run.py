"""``useradmin-api`` entrypoint: serve the reference user API with uvicorn."""
import argparse
import asyncio

import uvicorn

from useradmin.core.config import get_settings


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="useradmin-api", description=__doc__)
    parser.add_argument("--host", default=settings.api_host)
    parser.add_argument("--port", type=int, default=settings.api_port)
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="create the users table before serving (local sqlite without alembic)",
    )
    return parser.parse_args(argv)


def main(argv=None):  # pragma: no cover
    args = parse_args(argv)
    if args.create_tables:
        from useradmin.db.session import init_models
        asyncio.run(init_models())
    uvicorn.run(
        "useradmin.api.main:app",
        host=args.host,
        port=args.port,
        log_level=get_settings().log_level.lower(),
    )


if __name__ == "__main__":  # pragma: no cover
    main()
