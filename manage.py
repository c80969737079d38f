#!/usr/bin/env python3
"""
Outlet stock management CLI.

Usage:
    python manage.py serve                      Run the API server
    python manage.py migrate [--status|--verify] Apply or inspect migrations
    python manage.py sync [--dry-run]           Pull Zoho items and reconcile stock
    python manage.py sync --from-file items.json
"""

import argparse
import asyncio
import sys
from pathlib import Path

from outletstock.config import configure_logging, get_settings, log_context
from outletstock.core.exceptions import ExternalSourceError, OutletStockError


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port

    print(f"Starting server on {host}:{port}...")
    uvicorn.run(
        "outletstock.api.main:app",
        host=host,
        port=port,
        reload=args.reload,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    from outletstock.infrastructure.storage.sqlite.migrations.migrator import run_cli

    sys.exit(
        asyncio.run(
            run_cli(
                args.db_path,
                status=args.status,
                verify=args.verify,
                no_backup=args.no_backup,
            )
        )
    )


async def _run_sync(dry_run: bool, from_file: Path | None) -> int:
    from outletstock.application.use_cases import SyncMaterialsUseCase
    from outletstock.infrastructure.storage.sqlite import close_pool
    from outletstock.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    results = await run_migrations()
    if not all(r.success for r in results):
        print("Error: database migration failed; run 'migrate' for details.")
        return 1

    use_case = SyncMaterialsUseCase(from_file=from_file)
    source = str(from_file) if from_file else "zoho"
    try:
        with log_context(command="sync", source=source):
            result = await use_case.execute(dry_run=dry_run)
    except ExternalSourceError as e:
        print(f"Sync failed during '{e.step}': {e.message}")
        return 2
    except OutletStockError as e:
        print(f"Sync failed: {e.message}")
        return 1
    finally:
        await close_pool()

    label = "Dry run" if dry_run else "Sync"
    print(f"{label} {result.state.value}")
    for key, value in result.tally().items():
        print(f"  {key:<20} {value}")

    errors = [d for d in result.report.details if d.error] if result.report else []
    for outcome in errors:
        print(f"  ! {outcome.code}: {outcome.error}")
    return 0


def cmd_sync(args: argparse.Namespace) -> None:
    if args.from_file and not args.from_file.exists():
        print(f"Error: {args.from_file} not found.")
        sys.exit(1)
    sys.exit(asyncio.run(_run_sync(args.dry_run, args.from_file)))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Outlet stock management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Run the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default from settings)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default from settings)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply or inspect database migrations")
    p_migrate.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_migrate.add_argument("--status", action="store_true", help="Show migration status")
    p_migrate.add_argument("--verify", action="store_true", help="Verify schema integrity")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    p_migrate.set_defaults(func=cmd_migrate)

    # sync
    p_sync = sub.add_parser("sync", help="Reconcile external items into local stock")
    p_sync.add_argument("--dry-run", action="store_true", help="Report outcomes without writing")
    p_sync.add_argument(
        "--from-file",
        type=Path,
        default=None,
        help="Read items from a saved JSON dump instead of Zoho",
    )
    p_sync.set_defaults(func=cmd_sync)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
