"""
Schema migrator for the inventory database.

Migration files are named vNNN_description.sql and applied in version order,
each inside its own transaction together with its schema_migrations row. A
file edited after it was applied is reported, never re-run.
"""

import asyncio
import hashlib
import re
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import aiosqlite

from agrostock.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = (
    "schema_migrations",
    "product_prices",
    "legacy_inventory_products",
    "inventory_items",
    "inventory_movements",
    "inventory_alerts",
)

_FILENAME_RE = re.compile(r"v(?P<version>\d{3})_(?P<name>\w+)\.sql")

# Each query counts rows that break an inventory invariant
_DATA_CHECKS: dict[str, str] = {
    "non_negative_stock": "SELECT COUNT(*) FROM inventory_items WHERE current_stock < 0",
    "movements_reference_items": """
        SELECT COUNT(*) FROM inventory_movements m
        LEFT JOIN inventory_items i ON i.id = m.inventory_item_id
        WHERE i.id IS NULL
    """,
    "no_alerts_on_inactive_items": """
        SELECT COUNT(*) FROM inventory_alerts a
        JOIN inventory_items i ON i.id = a.item_id
        WHERE i.active = 0
    """,
}


@dataclass(frozen=True)
class Migration:
    version: str
    name: str
    sql: str
    checksum: str

    @classmethod
    def from_path(cls, path: Path) -> "Migration":
        match = _FILENAME_RE.fullmatch(path.name)
        if match is None:
            raise ValueError(f"Not a migration file name: {path.name}")
        sql = path.read_text(encoding="utf-8")
        return cls(
            version=match["version"],
            name=match["name"],
            sql=sql,
            checksum=hashlib.sha256(sql.encode("utf-8")).hexdigest()[:16],
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    duration_ms: int
    error: str | None = None


@dataclass
class MigrationStatus:
    db_path: Path
    exists: bool
    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)

    @property
    def current_version(self) -> str | None:
        return self.applied[-1] if self.applied else None


@dataclass
class SchemaCheck:
    name: str
    passed: bool
    detail: str = ""


def load_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Migration files in version order. Duplicate versions are an error."""
    migrations: dict[str, Migration] = {}
    for path in sorted(directory.glob("v*.sql")):
        migration = Migration.from_path(path)
        if migration.version in migrations:
            raise ValueError(f"Duplicate migration version {migration.version}: {path.name}")
        migrations[migration.version] = migration
    return list(migrations.values())


async def applied_versions(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied version -> checksum. Empty before the first migration."""
    cursor = await conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'schema_migrations'"
    )
    if await cursor.fetchone() is None:
        return {}
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def _apply(conn: aiosqlite.Connection, migration: Migration) -> MigrationResult:
    started = time.perf_counter()
    try:
        # executescript commits first; the explicit BEGIN keeps the script
        # and its bookkeeping row in one transaction
        await conn.executescript(f"BEGIN;\n{migration.sql}")
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (
                migration.version,
                migration.name,
                migration.checksum,
                int((time.perf_counter() - started) * 1000),
            ),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            migration.version,
            migration.name,
            success=False,
            duration_ms=int((time.perf_counter() - started) * 1000),
            error=str(e),
        )

    duration_ms = int((time.perf_counter() - started) * 1000)
    logger.info("migration_applied", version=migration.version, duration_ms=duration_ms)
    return MigrationResult(migration.version, migration.name, success=True, duration_ms=duration_ms)


async def _copy_database(source: Path, target: Path) -> None:
    # SQLite's online backup includes pages still in the WAL file
    async with aiosqlite.connect(source) as src, aiosqlite.connect(target) as dst:
        await src.backup(dst)


async def backup_database(db_path: Path) -> Path:
    backup_path = db_path.with_name(f"{db_path.stem}.{datetime.now():%Y%m%d_%H%M%S}.bak")
    await _copy_database(db_path, backup_path)
    logger.info("database_backed_up", backup_path=str(backup_path))
    return backup_path


async def restore_database(db_path: Path, backup_path: Path) -> None:
    await _copy_database(backup_path, db_path)
    logger.warning("database_restored", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Apply every pending migration.

    Stops at the first failure. When a backup was taken, it is restored
    after a failure and deleted after success.

    Args:
        db_path: Database file (default from storage settings)
        create_backup_before: Back up an existing database before migrating

    Returns:
        One result per migration attempted; empty when already up to date
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    migrations = load_migrations()

    async with aiosqlite.connect(db_path) as conn:
        applied = await applied_versions(conn)
    for migration in migrations:
        if migration.version in applied and applied[migration.version] != migration.checksum:
            logger.warning("migration_checksum_changed", version=migration.version)
    pending = [m for m in migrations if m.version not in applied]
    if not pending:
        logger.debug("database_up_to_date", db_path=str(db_path))
        return []

    backup_path = None
    if create_backup_before and applied:
        backup_path = await backup_database(db_path)

    logger.info("migrating_database", db_path=str(db_path), pending=[m.version for m in pending])
    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        for migration in pending:
            result = await _apply(conn, migration)
            results.append(result)
            if not result.success:
                break

    if backup_path is not None:
        if all(r.success for r in results):
            backup_path.unlink()
        else:
            await restore_database(db_path, backup_path)

    return results


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> MigrationStatus:
    db_path = db_path or get_settings().storage.db_path
    versions = [m.version for m in load_migrations()]

    if not db_path.exists():
        return MigrationStatus(db_path=db_path, exists=False, pending=versions)

    async with aiosqlite.connect(db_path) as conn:
        applied = await applied_versions(conn)
    return MigrationStatus(
        db_path=db_path,
        exists=True,
        applied=sorted(applied),
        pending=[v for v in versions if v not in applied],
    )


async def verify_schema_integrity(db_path: Path | None = None) -> list[SchemaCheck]:
    """SQLite integrity checks, required tables, and the inventory invariants."""
    db_path = db_path or get_settings().storage.db_path
    checks: list[SchemaCheck] = []

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        (integrity,) = await cursor.fetchone()
        checks.append(SchemaCheck("integrity", integrity == "ok", integrity))

        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = await cursor.fetchall()
        checks.append(
            SchemaCheck("foreign_keys", not violations, f"{len(violations)} violation(s)")
        )

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in tables]
        checks.append(SchemaCheck("required_tables", not missing, ", ".join(missing)))
        if missing:
            return checks

        for name, sql in _DATA_CHECKS.items():
            cursor = await conn.execute(sql)
            (count,) = await cursor.fetchone()
            checks.append(SchemaCheck(name, count == 0, f"{count} row(s)" if count else ""))

    return checks


def main() -> None:
    """agrostock-migrate: apply pending migrations, or report status / verify."""
    import argparse

    parser = argparse.ArgumentParser(prog="agrostock-migrate", description=__doc__)
    parser.add_argument("--db-path", type=Path, help="database file (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="show applied and pending versions")
    mode.add_argument("--verify", action="store_true", help="check integrity and invariants")
    parser.add_argument("--no-backup", action="store_true", help="do not back up before migrating")
    parser.add_argument("-v", "--verbose", action="store_true", help="log each step")
    args = parser.parse_args()

    configure_logging(level="DEBUG" if args.verbose else "WARNING", json_output=False)

    async def run() -> int:
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"{status.db_path}: {'present' if status.exists else 'missing'}")
            print(f"  current: {status.current_version or '-'}")
            print(f"  pending: {', '.join(status.pending) or '-'}")
            return 0

        if args.verify:
            checks = await verify_schema_integrity(args.db_path)
            for check in checks:
                line = f"{'ok  ' if check.passed else 'FAIL'} {check.name}"
                print(f"{line}  {check.detail}" if check.detail and not check.passed else line)
            return 0 if all(c.passed for c in checks) else 1

        results = await initialize_database(args.db_path, create_backup_before=not args.no_backup)
        if not results:
            print("up to date")
        for result in results:
            outcome = "applied" if result.success else f"FAILED: {result.error}"
            print(f"v{result.version} {result.name} {outcome} ({result.duration_ms}ms)")
        return 0 if all(r.success for r in results) else 1

    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
