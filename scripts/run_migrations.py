#!/usr/bin/env python3
"""Apply or roll back the freet store schema with Logfire error tracking.

    python scripts/run_migrations.py                 # upgrade to head
    python scripts/run_migrations.py 3c1f0a7d2b94    # upgrade to a revision
    python scripts/run_migrations.py base --downgrade
    python scripts/run_migrations.py head --sql      # print SQL, touch nothing
"""

import argparse
import sys
from pathlib import Path
from typing import Sequence

import logfire
from alembic import command
from alembic.config import Config

from fritter.config import Settings
from fritter.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def build_alembic_config(settings: Settings) -> Config:
    """Alembic config pointed at the configured database.

    Args:
        settings: Application settings

    Returns:
        Alembic config with script_location and sqlalchemy.url set
    """
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(ALEMBIC_INI.parent / "migrations"))
    # ConfigParser interpolation treats % as special
    config.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))
    return config


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument(
        "--downgrade", action="store_true", help="roll back to the revision instead"
    )
    parser.add_argument(
        "--sql", action="store_true", help="emit SQL instead of running it"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the requested migration and log any failure to Logfire."""
    args = parse_args(argv)
    settings = Settings()
    configure_logfire(settings)

    direction = "downgrade" if args.downgrade else "upgrade"
    migrate = command.downgrade if args.downgrade else command.upgrade

    with logfire.span(
        "Migrating freet store schema",
        direction=direction,
        revision=args.revision,
        offline=args.sql,
    ):
        try:
            migrate(build_alembic_config(settings), args.revision, sql=args.sql)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                direction=direction,
                revision=args.revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than serve against a half-migrated schema
            raise

    logfire.info("Database migration finished", direction=direction, revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
