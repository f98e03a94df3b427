from typing import Any, List, Optional

import requests

from treegraph.config import GRAPH_API_URL, GRAPH_API_TIMEOUT
from treegraph.hierarchy.builder import BuildPolicy
from treegraph.hierarchy.normalize import normalize_rows
from treegraph.ir.tree import FlatNode, GraphLayout
from treegraph.visual.tree_layout import TreeLayout
from treegraph.visual.visual_mapper import map_rows_to_visual


class GraphApiError(Exception):
    """Transport or HTTP failure while talking to the graph API."""


class GraphApiClient:
    def __init__(self, base_url: str = GRAPH_API_URL, timeout: float = GRAPH_API_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise GraphApiError(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise GraphApiError(f"GET {url} returned invalid JSON: {e}") from e

    def health(self) -> bool:
        return self._get("/api/health").get("status") == "ok"

    def fetch_payload(self) -> Any:
        """Raw ``{"data": [...]}`` body of /api/graph."""
        return self._get("/api/graph")

    def fetch_rows(self) -> List[FlatNode]:
        return normalize_rows(self.fetch_payload())

    def fetch_layout(
        self,
        layout: Optional[TreeLayout] = None,
        policy: BuildPolicy = BuildPolicy(),
    ) -> GraphLayout:
        """Fetch rows and lay them out locally."""
        return map_rows_to_visual(self.fetch_rows(), layout=layout, policy=policy)
