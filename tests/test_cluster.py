"""
Tests for the Elasticsearch adapter, with the client mocked out.
"""

from unittest.mock import MagicMock

from elasticsearch import ConnectionError as ESConnectionError
from elasticsearch import NotFoundError

from alias_reindex.cluster import ClusterResponse, SearchCluster
from alias_reindex.config import MigrationConfig, create_client
from alias_reindex.models import CreateIndexRequest, ReindexJob


def api_response(status, body):
    resp = MagicMock()
    resp.meta.status = status
    resp.body = body
    return resp


def test_response_ok():
    assert ClusterResponse(200).ok
    assert ClusterResponse(201).ok
    assert not ClusterResponse(404).ok
    assert not ClusterResponse(None, "refused").ok


def test_success_keeps_status_and_body():
    client = MagicMock()
    client.cat.aliases.return_value = api_response(200, "logs logs_v1 - - - -\n")
    resp = SearchCluster(client).cat_aliases("logs")
    assert resp == ClusterResponse(200, "logs logs_v1 - - - -\n")
    client.cat.aliases.assert_called_once_with(name="logs")


def test_api_error_becomes_response():
    client = MagicMock()
    body = {"error": {"type": "index_not_found_exception"}, "status": 404}
    client.indices.get_settings.side_effect = NotFoundError("not found", MagicMock(status=404), body)
    resp = SearchCluster(client).get_settings("nope")
    assert resp == ClusterResponse(404, body)
    client.indices.get_settings.assert_called_once_with(index="nope")


def test_transport_error_becomes_response_without_status():
    client = MagicMock()
    client.indices.close.side_effect = ESConnectionError("connection refused")
    resp = SearchCluster(client).close_index("logs_v1")
    assert resp.status is None
    assert "connection refused" in resp.body


def test_create_index_sends_structured_settings():
    client = MagicMock()
    client.indices.create.return_value = api_response(200, {"acknowledged": True})
    SearchCluster(client).create_index(CreateIndexRequest("logs_new", "3"))
    client.indices.create.assert_called_once_with(
        index="logs_new",
        settings={"refresh_interval": "-1", "number_of_replicas": 0, "number_of_shards": 3},
    )


def test_reindex_uses_configured_timeout():
    client = MagicMock()
    client.options.return_value.reindex.return_value = api_response(200, {"total": 1})
    resp = SearchCluster(client, request_timeout=None).reindex(ReindexJob("a", "b", slices="2"))
    assert resp.ok
    client.options.assert_called_once_with(request_timeout=None)
    client.options.return_value.reindex.assert_called_once_with(
        source={"index": "a"},
        dest={"index": "b"},
        slices=2,
        requests_per_second=-1,
        wait_for_completion=True,
    )


def test_alias_and_settings_calls():
    client = MagicMock()
    client.indices.update_aliases.return_value = api_response(200, {"acknowledged": True})
    client.indices.put_settings.return_value = api_response(200, {"acknowledged": True})
    client.indices.put_index_template.return_value = api_response(200, {"acknowledged": True})
    cluster = SearchCluster(client)

    actions = [{"remove": {"index": "a", "alias": "p"}}, {"add": {"index": "b", "alias": "p"}}]
    assert cluster.update_aliases(actions).ok
    client.indices.update_aliases.assert_called_once_with(actions=actions)

    assert cluster.put_settings("b", {"number_of_replicas": 1}).ok
    client.indices.put_settings.assert_called_once_with(index="b", settings={"number_of_replicas": 1})

    assert cluster.put_index_template("logs", {"index_patterns": ["logs_*"]}).ok
    client.indices.put_index_template.assert_called_once_with(
        name="logs", body={"index_patterns": ["logs_*"]}
    )


def test_basic_auth_only_with_user_and_password(monkeypatch):
    created = []
    monkeypatch.setattr("alias_reindex.config.Elasticsearch",
                        lambda url, **kwargs: created.append((url, kwargs)))

    create_client(MigrationConfig(url="http://es:9200", username="elastic"))
    create_client(MigrationConfig(url="http://es:9200", username="elastic", password="pw"))
    assert "basic_auth" not in created[0][1]
    assert created[1][1]["basic_auth"] == ("elastic", "pw")


def test_client_never_retries(monkeypatch):
    created = []
    monkeypatch.setattr("alias_reindex.config.Elasticsearch",
                        lambda url, **kwargs: created.append((url, kwargs)))

    create_client(MigrationConfig(url="http://es:9200"))
    _, kwargs = created[0]
    assert kwargs["max_retries"] == 0
    assert kwargs["retry_on_status"] == ()
    assert kwargs["retry_on_timeout"] is False
