"""One-shot transfer of local data into the remote store after sign-in."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..errors import MigrationPartialFailure
from ..storage.local import LocalStore
from ..storage.mapping import to_remote
from ..storage.namespaces import MIGRATED_COLLECTIONS, MIGRATED_NAMESPACES, Collection
from ..storage.remote import RemoteStore

logger = logging.getLogger(__name__)


class MigrationState(str, Enum):
    """Lifecycle of a migration run. There is no failed state."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"


class ClearPolicy(str, Enum):
    """Which local namespaces are cleared once every transfer was attempted."""

    ALL = "all"  # every namespace, even ones whose transfer failed
    MIGRATED_ONLY = "migrated_only"  # keep failed namespaces for a later run


@dataclass
class MigrationReport:
    """Outcome of a migration run, per namespace."""

    migrated: dict[str, int] = field(default_factory=dict)  # namespace -> record count
    skipped: list[str] = field(default_factory=list)
    failures: list[MigrationPartialFailure] = field(default_factory=list)
    cleared: list[str] = field(default_factory=list)

    @property
    def failed(self) -> list[str]:
        return [f.namespace for f in self.failures]

    @property
    def ok(self) -> bool:
        return not self.failures

    def get_summary(self) -> str:
        lines = [
            f"Migrated: {len(self.migrated)} namespaces "
            f"({sum(self.migrated.values())} records)",
            f"Skipped (empty): {len(self.skipped)}",
        ]
        if self.failures:
            lines.append(f"Failed: {', '.join(self.failed)}")
        return "\n".join(lines)


class LocalDataMigration:
    """Drain every known local namespace into the matching remote table.

    Namespaces are processed strictly in order and each transfer is awaited
    before the next begins. A failing namespace is logged and the run
    continues. With the default ClearPolicy.ALL, all local namespaces are
    cleared afterwards regardless of failures, so data of a failed
    namespace is lost.
    """

    def __init__(
        self,
        local: LocalStore,
        remote: RemoteStore,
        clear_policy: ClearPolicy = ClearPolicy.ALL,
    ):
        self.local = local
        self.remote = remote
        self.clear_policy = ClearPolicy(clear_policy)
        self.state = MigrationState.NOT_STARTED
        self.report = MigrationReport()

    async def run(self) -> MigrationReport:
        """Execute the migration once; never raises for per-namespace errors."""
        if self.state is not MigrationState.NOT_STARTED:
            raise RuntimeError(f"Migration already {self.state.value}")

        self.state = MigrationState.RUNNING
        logger.info("Starting local data migration")

        try:
            for collection in MIGRATED_COLLECTIONS:
                await self._migrate(collection)
        finally:
            self._clear()
            self.state = MigrationState.COMPLETED

        if self.report.failures:
            logger.warning(
                "Local data migration completed with failures: %s",
                ", ".join(self.report.failed),
            )
        else:
            logger.info("Local data migration completed successfully")
        return self.report

    async def _migrate(self, collection: Collection) -> None:
        namespace = collection.namespace.value
        try:
            records = self.local.read(collection.namespace)
            if not records:
                self.report.skipped.append(namespace)
                return
            models = [
                collection.model.from_dict(to_remote(collection.namespace, record))
                for record in records
            ]
            await self.remote.save(collection.table, models)
        except Exception as e:
            failure = MigrationPartialFailure(namespace, e)
            logger.error("%s", failure, exc_info=True)
            self.report.failures.append(failure)
            return

        logger.info("Migrated %d records from %s", len(models), namespace)
        self.report.migrated[namespace] = len(models)

    def _clear(self) -> None:
        if self.clear_policy is ClearPolicy.ALL:
            to_clear = [ns.value for ns in MIGRATED_NAMESPACES]
        else:
            failed = set(self.report.failed)
            to_clear = [ns.value for ns in MIGRATED_NAMESPACES if ns.value not in failed]

        try:
            self.local.clear(to_clear)
        except (OSError, ValueError) as e:
            logger.error("Could not clear local data after migration: %s", e)
            return
        self.report.cleared = to_clear


async def migrate_after_sign_in(
    local: LocalStore,
    remote: RemoteStore,
    clear_policy: ClearPolicy = ClearPolicy.ALL,
) -> MigrationReport:
    """Run the post-sign-in migration once."""
    return await LocalDataMigration(local, remote, clear_policy).run()
