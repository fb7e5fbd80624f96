# cluster.py
"""
Narrow adapter over the Elasticsearch client.

Only the eight calls the migration needs are exposed. Each one returns a
``ClusterResponse`` instead of raising, so callers decide for themselves
whether a failed call is fatal or best-effort. Nothing here retries.
"""

from dataclasses import dataclass
from typing import Any, Optional

from elasticsearch import ApiError, TransportError

from alias_reindex.config import logger


@dataclass(frozen=True)
class ClusterResponse:
    """HTTP status and body of one cluster call (status None = no response)."""

    status: Optional[int]
    body: Any = None

    @property
    def ok(self):
        return self.status is not None and 200 <= self.status < 300


class SearchCluster:
    """
    Executes migration requests against one Elasticsearch cluster.

    :param client: ``elasticsearch.Elasticsearch`` instance.
    :param request_timeout: Client-side timeout for the blocking reindex
        call; None waits until the cluster answers.
    """

    def __init__(self, client, request_timeout=None):
        self.client = client
        self.request_timeout = request_timeout

    def _call(self, name, fn, /, *args, **kwargs):
        try:
            resp = fn(*args, **kwargs)
        except ApiError as e:
            logger.debug("%s answered %s: %s", name, e.meta.status, e.body)
            return ClusterResponse(e.meta.status, e.body)
        except TransportError as e:
            logger.debug("%s got no response: %s", name, e)
            return ClusterResponse(None, str(e))
        return ClusterResponse(resp.meta.status, resp.body)

    def put_index_template(self, name, body):
        return self._call("put_index_template", self.client.indices.put_index_template,
                          name=name, body=body)

    def cat_aliases(self, alias):
        return self._call("cat_aliases", self.client.cat.aliases, name=alias)

    def get_settings(self, index):
        return self._call("get_settings", self.client.indices.get_settings,
                          index=index)

    def create_index(self, request):
        return self._call("create_index", self.client.indices.create,
                          index=request.index, settings=request.settings_body())

    def reindex(self, job):
        client = self.client.options(request_timeout=self.request_timeout)
        return self._call("reindex", client.reindex, **job.request_params())

    def update_aliases(self, actions):
        return self._call("update_aliases", self.client.indices.update_aliases,
                          actions=actions)

    def put_settings(self, index, settings):
        return self._call("put_settings", self.client.indices.put_settings,
                          index=index, settings=settings)

    def close_index(self, index):
        return self._call("close_index", self.client.indices.close, index=index)
