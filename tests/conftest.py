"""
Shared pytest fixtures: an in-memory cluster standing in for Elasticsearch.
"""

import pytest

from alias_reindex.cluster import ClusterResponse
from alias_reindex.config import MigrationConfig

OK = ClusterResponse(200, {"acknowledged": True})


class FakeCluster:
    """
    Records every call and answers with scripted responses.

    ``responses`` maps an operation name to the ClusterResponse it returns;
    unscripted operations answer 200.
    """

    def __init__(self, **responses):
        self.responses = responses
        self.calls = []

    def _answer(self, name, *args):
        self.calls.append((name,) + args)
        return self.responses.get(name, OK)

    def names(self):
        return [call[0] for call in self.calls]

    def call(self, name):
        matches = [c for c in self.calls if c[0] == name]
        assert len(matches) == 1, f"{name} called {len(matches)} times"
        return matches[0]

    def put_index_template(self, name, body):
        return self._answer("put_index_template", name, body)

    def cat_aliases(self, alias):
        return self._answer("cat_aliases", alias)

    def get_settings(self, index):
        return self._answer("get_settings", index)

    def create_index(self, request):
        return self._answer("create_index", request)

    def reindex(self, job):
        return self._answer("reindex", job)

    def update_aliases(self, actions):
        return self._answer("update_aliases", actions)

    def put_settings(self, index, settings):
        return self._answer("put_settings", index, settings)

    def close_index(self, index):
        return self._answer("close_index", index)


def settings_response(index, shards="3", replicas="1", refresh="30s"):
    index_settings = {"number_of_shards": shards, "number_of_replicas": replicas}
    if refresh is not None:
        index_settings["refresh_interval"] = refresh
    return ClusterResponse(200, {index: {"settings": {"index": index_settings}}})


@pytest.fixture
def fake_cluster():
    return FakeCluster


@pytest.fixture
def base_config():
    return MigrationConfig(url="http://localhost:9200")


@pytest.fixture(name="settings_response")
def settings_response_fixture():
    return settings_response


@pytest.fixture
def ok_response():
    return OK
