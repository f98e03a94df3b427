from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List


class HealthResponse(BaseModel):
    status: str


class GraphResponse(BaseModel):
    """Nested root nodes: {name, description, parent, children}"""
    data: List[Dict[str, Any]]


class PositionedNodeModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    description: str
    parent_id: str
    depth: int
    x: float
    y: float
    color: str


class EdgeModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    source: str
    target: str


class LayoutResponse(BaseModel):
    """Built straight from a GraphLayout dataclass."""
    model_config = ConfigDict(from_attributes=True)

    nodes: List[PositionedNodeModel]
    edges: List[EdgeModel]
    width: float
    height: float


class ErrorResponse(BaseModel):
    error: str
    code: str = ""
    message: str = ""
