"""Versioned SQL migrations (vNNN_name.sql) and the migrator that applies them."""

from agrostock.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationResult,
    MigrationStatus,
    SchemaCheck,
    get_migration_status,
    initialize_database,
    run_migrations,
    verify_schema_integrity,
)

__all__ = [
    "MigrationResult",
    "MigrationStatus",
    "SchemaCheck",
    "initialize_database",
    "run_migrations",
    "get_migration_status",
    "verify_schema_integrity",
]
