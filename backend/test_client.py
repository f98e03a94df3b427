"""Tests for the graph API client"""

from unittest.mock import Mock, patch

import pytest
import requests

from treegraph.client import GraphApiClient, GraphApiError
from treegraph.ir import FlatNode, NoRootFound


NESTED_PAYLOAD = {
    "data": [
        {
            "name": "A",
            "description": "This is description A",
            "parent": "",
            "children": [
                {"name": "B", "description": "This is description B", "parent": "A", "children": []},
                {"name": "C", "description": "This is description C", "parent": "A", "children": []},
            ],
        }
    ]
}


def make_response(payload) -> Mock:
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def mock_get():
    with patch("treegraph.client.graph_api.requests.get") as mock:
        yield mock


def test_fetch_rows_flattens_nested_payload(mock_get):
    mock_get.return_value = make_response(NESTED_PAYLOAD)

    rows = GraphApiClient(base_url="http://graph.local/", timeout=3).fetch_rows()

    mock_get.assert_called_once_with("http://graph.local/api/graph", timeout=3)
    assert rows == [
        FlatNode("A", "This is description A", ""),
        FlatNode("B", "This is description B", "A"),
        FlatNode("C", "This is description C", "A"),
    ]


def test_fetch_layout(mock_get):
    mock_get.return_value = make_response(NESTED_PAYLOAD)

    graph = GraphApiClient(base_url="http://graph.local").fetch_layout()

    assert [n.id for n in graph.nodes] == ["A", "B", "C"]
    assert [(e.source, e.target) for e in graph.edges] == [("A", "B"), ("A", "C")]


def test_fetch_layout_of_empty_graph(mock_get):
    mock_get.return_value = make_response({"data": []})

    with pytest.raises(NoRootFound):
        GraphApiClient(base_url="http://graph.local").fetch_layout()


def test_health(mock_get):
    mock_get.return_value = make_response({"status": "ok"})
    assert GraphApiClient(base_url="http://graph.local").health() is True


def test_connection_error_is_wrapped(mock_get):
    mock_get.side_effect = requests.ConnectionError("refused")

    with pytest.raises(GraphApiError):
        GraphApiClient(base_url="http://graph.local").fetch_payload()


def test_http_error_is_wrapped(mock_get):
    response = make_response({})
    response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    mock_get.return_value = response

    with pytest.raises(GraphApiError):
        GraphApiClient(base_url="http://graph.local").fetch_rows()


def test_invalid_json_is_wrapped(mock_get):
    response = make_response(None)
    response.json.side_effect = ValueError("Expecting value")
    mock_get.return_value = response

    with pytest.raises(GraphApiError):
        GraphApiClient(base_url="http://graph.local").fetch_payload()
