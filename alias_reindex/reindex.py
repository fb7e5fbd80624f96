# reindex.py

from alias_reindex.config import logger
from alias_reindex.errors import ReindexError
from alias_reindex.models import ReindexJob


def normalize_slices(slices):
    """
    Keep ``"disable"`` or a positive integer; anything else becomes ``"auto"``.
    """
    value = (slices or "").strip()
    if value.lower() == "disable":
        return value
    if value.isdigit() and int(value) > 0:
        return value
    if value != "auto":
        logger.warning("%r is not a valid value for slices, falling back to auto", slices)
    return "auto"


def run_reindex(cluster, source_index, dest_index, slices="auto", requests_per_second=-1):
    """
    Copy every document of ``source_index`` into ``dest_index``.

    The request waits for completion, so this blocks until the cluster
    reports the task done. The document count is not verified; a success
    status is trusted.

    :raises ReindexError: carrying the response body, which lists
        per-shard failures when the cluster reports any.
    """
    job = ReindexJob(
        source_index=source_index,
        dest_index=dest_index,
        slices=normalize_slices(slices),
        requests_per_second=requests_per_second,
    )
    logger.info("🚀 Reindexing '%s' → '%s' (slices=%s, requests_per_second=%s)",
                source_index, dest_index, job.slices, job.requests_per_second)
    resp = cluster.reindex(job)
    if not resp.ok:
        raise ReindexError(f"reindex of '{source_index}' into '{dest_index}' failed",
                           resp.status, resp.body)

    body = resp.body if isinstance(resp.body, dict) else {}
    logger.info("✅ Reindex of '%s' complete (%s docs in %s ms)",
                source_index, body.get("total", "?"), body.get("took", "?"))
    return job
