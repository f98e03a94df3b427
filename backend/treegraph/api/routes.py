import traceback

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from treegraph.config import (
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    CANVAS_MARGIN,
    ORPHAN_POLICY,
    ROOT_POLICY,
)
from treegraph.db.session import get_db
from treegraph.db.store import GraphStore
from treegraph.hierarchy.builder import BuildPolicy
from treegraph.ir.errors import HierarchyError, LayoutError
from treegraph.renderer.svg_renderer import render_svg
from treegraph.schemas import GraphResponse, HealthResponse, LayoutResponse
from treegraph.visual.tree_layout import NetworkxTreeLayout
from treegraph.visual.visual_mapper import map_rows_to_visual

router = APIRouter(prefix="/api", tags=["graph"])


def get_layout() -> NetworkxTreeLayout:
    return NetworkxTreeLayout(
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        margin=CANVAS_MARGIN,
    )


def get_policy() -> BuildPolicy:
    return BuildPolicy(orphans=ORPHAN_POLICY, multiple_roots=ROOT_POLICY)


def _render_failed(exc) -> JSONResponse:
    # Precise kind is for diagnostics; the caller only sees one state.
    print(f"[Routes] Could not render graph: [{exc.code}] {exc}")
    return JSONResponse(
        status_code=422,
        content={"error": "Could not render graph data", "code": exc.code},
    )


def _request_failed(exc: Exception) -> JSONResponse:
    traceback.print_exc()
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to process request", "message": str(exc)},
    )


@router.get("/health", response_model=HealthResponse)
def health():
    return {"status": "ok"}


@router.get("/graph", response_model=GraphResponse)
def get_graph(db: Session = Depends(get_db)):
    try:
        data = GraphStore(db).fetch_forest()
        print(f"[Routes] Serving graph with {len(data)} root(s)")
        return GraphResponse(data=data)
    except HierarchyError as e:
        return _render_failed(e)
    except Exception as e:
        return _request_failed(e)


@router.get("/graph/layout", response_model=LayoutResponse)
def get_graph_layout(
    db: Session = Depends(get_db),
    layout: NetworkxTreeLayout = Depends(get_layout),
    policy: BuildPolicy = Depends(get_policy),
):
    try:
        rows = GraphStore(db).fetch_rows()
        graph = map_rows_to_visual(rows, layout=layout, policy=policy)
        return LayoutResponse.model_validate(graph)
    except (HierarchyError, LayoutError) as e:
        return _render_failed(e)
    except Exception as e:
        return _request_failed(e)


@router.get("/graph/svg")
def get_graph_svg(
    db: Session = Depends(get_db),
    layout: NetworkxTreeLayout = Depends(get_layout),
    policy: BuildPolicy = Depends(get_policy),
):
    try:
        rows = GraphStore(db).fetch_rows()
        graph = map_rows_to_visual(rows, layout=layout, policy=policy)
        return Response(content=render_svg(graph), media_type="image/svg+xml")
    except (HierarchyError, LayoutError) as e:
        return _render_failed(e)
    except Exception as e:
        return _request_failed(e)
