# migration.py
"""
The reindex migration, step by step.

    publish template (best-effort)
    -> resolve source -> snapshot settings -> create destination
    -> reindex -> restore settings (best-effort) -> switch alias
    -> close old index (best-effort, alias runs only)

Each cluster call is made once, in this order. A fatal step raises and
nothing after it runs; there is no rollback.
"""

from alias_reindex.alias_utils import switch_alias
from alias_reindex.config import logger
from alias_reindex.errors import ReindexError
from alias_reindex.indices import (
    close_index,
    create_dest_index,
    derive_dest_index,
    resolve_source_index,
    restore_settings,
    snapshot_settings,
)
from alias_reindex.models import MigrationPlan
from alias_reindex.reindex import run_reindex
from alias_reindex.templates import publish_index_template


def migrate(cluster, config):
    """
    Reindex the configured index (or the index behind the alias) into a
    fresh index and repoint the alias to it.

    :param cluster: ``SearchCluster`` (or anything with the same calls).
    :param config: validated ``MigrationConfig``.
    :return: the ``MigrationPlan`` describing what was done.
    :raises MigrationError: on the first fatal step.
    """
    plan = MigrationPlan()

    # 0) Template first so the new index picks it up at creation
    publish_index_template(cluster, config.template_location, config.template_name)

    # 1) Source and destination names
    plan.source_index = resolve_source_index(cluster, config.index, config.alias)
    plan.dest_index = derive_dest_index(plan.source_index, config.new_index)
    logger.info("Migrating '%s' → '%s'", plan.source_index, plan.dest_index)

    # 2) Snapshot settings before anything is mutated
    plan.settings = snapshot_settings(cluster, plan.source_index)

    # 3) Destination with refresh off and no replicas
    create_dest_index(
        cluster,
        plan.dest_index,
        plan.settings.primary_shard_count,
        config.target_shard_count,
        config.template_location,
    )

    # 4) Copy documents
    try:
        run_reindex(cluster, plan.source_index, plan.dest_index,
                    config.slices, config.requests_per_second)
    except ReindexError:
        logger.warning(
            "Index '%s' was left behind with replicas and refresh disabled; "
            "alias untouched. Delete it manually before retrying.",
            plan.dest_index
        )
        raise

    # 5) Production settings back; failure only degrades the new index
    plan.settings_restored = restore_settings(cluster, plan.dest_index, plan.settings)

    # 6) Atomic alias swap
    plan.alias_binding = switch_alias(
        cluster, config.alias, config.extra_alias, plan.source_index, plan.dest_index
    )
    plan.alias_switched = plan.alias_binding is not None

    # 7) Without an alias, direct readers still use the old index: keep it open
    if config.alias:
        plan.old_index_closed = close_index(cluster, plan.source_index)

    logger.info("🎉 New index '%s' has been completed with reindex from '%s'",
                plan.dest_index, plan.source_index)
    if plan.alias_switched:
        logger.info("Alias '%s' pointing to '%s'", config.alias, plan.dest_index)
    return plan
