"""Data access helpers for campus resources."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..models.entities import Resource
from .store import get_store


def create_resource(
    name: str,
    category: str,
    description: Optional[str] = None,
    capacity: Optional[int] = None,
) -> Resource:
    """Insert a new resource; resources start out available."""

    store = get_store()
    resource = Resource(
        resource_id=store.resources.next_id(),
        name=name,
        category=category,
        description=description or "",
        capacity=capacity,
        created_at=datetime.now(timezone.utc),
    )
    return store.resources.add(resource)


def get_resource_by_id(resource_id: int) -> Resource | None:
    """Fetch a single resource."""

    return get_store().resources.get(resource_id)


def list_resources(category: Optional[str] = None, available: Optional[bool] = None) -> list[Resource]:
    """Return resources, optionally filtered by category and availability."""

    def _matches(resource: Resource) -> bool:
        if category and resource.category != category:
            return False
        if available is not None and resource.available != available:
            return False
        return True

    return get_store().resources.filter(_matches)
