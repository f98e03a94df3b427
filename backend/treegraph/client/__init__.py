from treegraph.client.graph_api import GraphApiClient, GraphApiError

__all__ = ["GraphApiClient", "GraphApiError"]
