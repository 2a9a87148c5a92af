"""
Page/limit pagination shared by list endpoints.
"""

import math

from django.conf import settings
from django.db.models import QuerySet


def paginate(queryset: QuerySet, page: int = 1, limit: int | None = None) -> tuple[list, dict]:
    """Slice a queryset and return (items, pagination info)."""
    if limit is None or limit < 1:
        limit = settings.DEFAULT_PAGE_SIZE
    limit = min(limit, settings.MAX_PAGE_SIZE)
    page = max(page, 1)

    total = queryset.count()
    total_pages = math.ceil(total / limit) if limit > 0 else 1
    offset = (page - 1) * limit
    items = list(queryset[offset : offset + limit])

    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
    }
