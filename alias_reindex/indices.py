# indices.py

from datetime import datetime

from alias_reindex.config import logger
from alias_reindex.errors import (
    AliasNotFoundError,
    IndexCreationError,
    IndexNotFoundError,
)
from alias_reindex.models import CreateIndexRequest, TransientIndexSettings

INDEX_SUFFIX_FORMAT = "%Y-%m-%d-%H-%M"

# ----------------------------
# Source / destination naming
# ----------------------------

def resolve_source_index(cluster, explicit_index, alias_name):
    """
    Return the index the migration copies from.

    1) An explicit index name is used as is; the alias is not looked up.
    2) Otherwise the alias is resolved through the Cat Aliases API. The
       listing reads ``alias index filter routing.index routing.search``;
       the index is the second token. Fewer than three tokens means the
       alias does not exist.
    """
    if explicit_index:
        return explicit_index

    logger.debug("Finding existing index name from alias '%s'", alias_name)
    resp = cluster.cat_aliases(alias_name)
    if not resp.ok:
        raise AliasNotFoundError(f"alias '{alias_name}' lookup failed", resp.status, resp.body)

    listing = resp.body or ""
    lines = [line for line in listing.splitlines() if line.strip()]
    tokens = lines[0].split() if lines else []
    if len(tokens) < 3:
        raise AliasNotFoundError(f"alias '{alias_name}' doesn't exist", resp.status, listing)
    if len(lines) > 1:
        logger.warning(
            "Alias '%s' points to %d indices; using '%s'. Pass --index to pick another one.",
            alias_name, len(lines), tokens[1]
        )
    logger.info("🔎 Found index '%s' behind alias '%s'", tokens[1], alias_name)
    return tokens[1]


def derive_dest_index(source_index, explicit_override="", now=None):
    """
    Name the destination index.

    An explicit name wins. Otherwise everything before the last ``_`` of the
    source name (or the whole name when there is none, or it is the first
    character) gets a ``_YYYY-MM-DD-HH-MM`` suffix.
    """
    if explicit_override:
        return explicit_override

    cut = source_index.rfind("_")
    prefix = source_index[:cut] if cut > 0 else source_index
    suffix = (now or datetime.now()).strftime(INDEX_SUFFIX_FORMAT)
    index_name = f"{prefix}_{suffix}"
    logger.debug("Calculated new index name would be %s", index_name)
    return index_name

# ----------------------------
# Settings snapshot / restore
# ----------------------------

def _lookup(doc, *path):
    for key in path:
        if not isinstance(doc, dict) or key not in doc:
            return None
        doc = doc[key]
    return doc


def _index_setting(index_doc, key):
    value = _lookup(index_doc, "settings", "index", key)
    return "" if value is None else str(value)


def snapshot_settings(cluster, index_name):
    """
    Capture refresh interval, replica and primary shard counts of the source.

    Raises IndexNotFoundError when the settings can't be read.
    """
    resp = cluster.get_settings(index_name)
    if not resp.ok:
        raise IndexNotFoundError(f"index '{index_name}' doesn't exist", resp.status, resp.body)

    body = resp.body or {}
    index_doc = body.get(index_name)
    if index_doc is None and len(body) == 1:
        # name was an alias; the response is keyed by the concrete index
        index_doc = next(iter(body.values()))
    if index_doc is None:
        logger.warning(
            "No settings of '%s' in the response (indices: %s); refresh interval, "
            "replicas and shard count will fall back to cluster defaults",
            index_name, ", ".join(body) or "none"
        )

    settings = TransientIndexSettings(
        refresh_interval=_index_setting(index_doc, "refresh_interval"),
        primary_shard_count=_index_setting(index_doc, "number_of_shards"),
        replica_count=_index_setting(index_doc, "number_of_replicas"),
    )
    logger.debug("Settings of '%s': %s", index_name, settings)
    return settings


def restore_settings(cluster, index_name, settings):
    """
    Put the production refresh interval and replica count back on the new index.

    Best-effort: a failure is logged and reported as False, never raised.
    """
    resp = cluster.put_settings(index_name, settings.restore_body())
    if not resp.ok:
        logger.error("❗ Update of index settings on '%s' failed (%s): %s",
                     index_name, resp.status, resp.body)
        return False
    logger.info("⚙️  Restored '%s' settings (replicas %s, refresh interval %s)",
                index_name, settings.replica_count, settings.refresh_interval or "default")
    return True

# ----------------------------
# Destination provisioning
# ----------------------------

def build_create_index_request(index_name, primaries, target_shard_count=-1, template_location=""):
    """
    Creation request with refresh disabled and no replicas.

    The shard count is left to the template when one is configured;
    otherwise a positive override wins over the source primary count.
    """
    shards = None
    if not template_location:
        shards = target_shard_count if target_shard_count > 0 else primaries
    return CreateIndexRequest(index=index_name, number_of_shards=shards)


def create_dest_index(cluster, index_name, primaries, target_shard_count=-1, template_location=""):
    """
    Create the destination index tuned for bulk load.

    Raises IndexCreationError wrapping the cluster response on failure.
    """
    request = build_create_index_request(index_name, primaries, target_shard_count, template_location)
    resp = cluster.create_index(request)
    if not resp.ok:
        raise IndexCreationError(f"new index '{index_name}' creation failed", resp.status, resp.body)
    logger.info("✅ Created '%s' with no replicas and refresh interval disabled", index_name)
    return request


def close_index(cluster, index_name):
    """Close the retired index. Best-effort; returns False on failure."""
    resp = cluster.close_index(index_name)
    if not resp.ok:
        logger.warning("❗ Closing index '%s' failed (%s): %s", index_name, resp.status, resp.body)
        return False
    logger.info("🔒 Index '%s' is now closed", index_name)
    return True
