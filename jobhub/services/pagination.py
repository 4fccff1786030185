from typing import List, Tuple

from sqlalchemy.orm import Query

from jobhub.schemas.common import BaseFilter, PageResult


def apply_sort(query: Query, model, sort_items: List[Tuple[str, str]]) -> Query:
    """Translate parsed sort items into ORDER BY clauses (default: id asc)."""
    if not sort_items:
        return query.order_by(model.id.asc())
    for name, direction in sort_items:
        column = getattr(model, name)
        query = query.order_by(column.desc() if direction == "desc" else column.asc())
    return query


def paginate(query: Query, model, filter: BaseFilter) -> PageResult:
    """Run the count and the page query inside the session's current transaction."""
    total = query.order_by(None).count()
    items = (
        apply_sort(query, model, filter.sort_items())
        .offset(filter.offset)
        .limit(filter.limit)
        .all()
    )
    return PageResult(items=items, total=total, offset=filter.offset, limit=filter.limit)
