from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class QueryRequest(BaseModel):
    query: Optional[str] = None


class QueryResponse(BaseModel):
    response: str
    recipeJson: Optional[Any] = None
