"""Health check schemas."""

from typing import Dict, List

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str
    platforms: List[str] = []
    cache: Dict[str, int] = {}
