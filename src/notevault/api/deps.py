"""Shared router dependencies."""

from dataclasses import dataclass

from fastapi import Query

from ..config import get_settings

settings = get_settings()


@dataclass
class Pagination:
    page: int
    limit: int


def get_pagination(
    page: int = Query(1, ge=1, description="1-indexed page number"),
    limit: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size, description="Page size"
    ),
) -> Pagination:
    return Pagination(page=page, limit=limit)
