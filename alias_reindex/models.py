# models.py
"""
Request and state objects threaded through a migration run.

Every request body sent to the cluster is built from one of these objects
and handed to the Elasticsearch client as plain data, which serializes it
to JSON. Index and alias names are never spliced into JSON text.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Settings applied to the destination index while documents are copied.
REINDEX_REFRESH_INTERVAL = "-1"
REINDEX_REPLICAS = 0


def as_count(value):
    """
    Return ``value`` as an int when it is a plain number string.

    The cluster reports shard/replica counts as strings; they are sent back
    as JSON numbers without any arithmetic.
    """
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


@dataclass(frozen=True)
class TransientIndexSettings:
    """Source index settings captured before the migration starts."""

    refresh_interval: str = ""
    primary_shard_count: str = ""
    replica_count: str = ""

    def restore_body(self) -> Dict[str, Any]:
        """
        Settings body putting the production refresh/replica values back.

        An empty refresh interval becomes ``None`` so the cluster falls back
        to its own default instead of rejecting an empty string.
        """
        return {
            "refresh_interval": self.refresh_interval or None,
            "number_of_replicas": as_count(self.replica_count),
        }


@dataclass(frozen=True)
class CreateIndexRequest:
    """Destination index creation tuned for bulk load."""

    index: str
    number_of_shards: Optional[Any] = None

    def settings_body(self) -> Dict[str, Any]:
        settings = {
            "refresh_interval": REINDEX_REFRESH_INTERVAL,
            "number_of_replicas": REINDEX_REPLICAS,
        }
        if self.number_of_shards not in (None, ""):
            settings["number_of_shards"] = as_count(self.number_of_shards)
        return settings


@dataclass(frozen=True)
class AliasBinding:
    """
    Alias edges to move from the current index to the new one.

    Each alias is removed from ``current_index`` and added to ``new_index``
    inside the same request, so the swap is a replacement.
    """

    alias_name: str
    current_index: str
    new_index: str
    extra_alias_name: str = ""

    def aliases(self) -> List[str]:
        names = [self.alias_name]
        if self.extra_alias_name:
            names.append(self.extra_alias_name)
        return names

    def actions(self) -> List[Dict[str, Dict[str, str]]]:
        actions = []
        for alias in self.aliases():
            actions.append({"remove": {"index": self.current_index, "alias": alias}})
            actions.append({"add": {"index": self.new_index, "alias": alias}})
        return actions


@dataclass(frozen=True)
class ReindexJob:
    """A blocking reindex from one index into another."""

    source_index: str
    dest_index: str
    slices: str = "auto"
    requests_per_second: int = -1
    wait_for_completion: bool = True

    def request_params(self) -> Dict[str, Any]:
        """
        Keyword arguments for ``Elasticsearch.reindex``.

        A ``"disable"`` job sends no slices parameter at all, which the
        cluster runs as a single slice.
        """
        params = {
            "source": {"index": self.source_index},
            "dest": {"index": self.dest_index},
            "requests_per_second": self.requests_per_second,
            "wait_for_completion": self.wait_for_completion,
        }
        if self.slices.lower() != "disable":
            params["slices"] = as_count(self.slices)
        return params


@dataclass
class MigrationPlan:
    """What a run resolved and did, filled in step by step."""

    source_index: str = ""
    dest_index: str = ""
    settings: TransientIndexSettings = field(default_factory=TransientIndexSettings)
    alias_binding: Optional[AliasBinding] = None
    settings_restored: bool = False
    alias_switched: bool = False
    old_index_closed: bool = False
