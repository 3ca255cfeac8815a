"""
Pagination for list endpoints.

PaginationSpec turns raw page/limit/sort input into safe bounds,
execute_paged_query applies compiled filter predicates, sorting and slicing to
a queryset, and PagedResult carries the page plus the derived page metadata.
"""

import math

from .exceptions import FieldIssue, ValidationFailure

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
DEFAULT_SORT_BY = 'created_at'

SORT_ASC = 'ASC'
SORT_DESC = 'DESC'
SORT_ORDERS = (SORT_ASC, SORT_DESC)


class PaginationSpec:
    """Normalized page, limit and sort settings for one list request."""

    def __init__(self, page=DEFAULT_PAGE, limit=DEFAULT_LIMIT,
                 sort_by=DEFAULT_SORT_BY, sort_order=SORT_ASC):
        self.page = page
        self.limit = limit
        self.sort_by = sort_by
        self.sort_order = sort_order

    @property
    def offset(self):
        return (self.page - 1) * self.limit

    @property
    def ordering(self):
        """Sort key in ``QuerySet.order_by`` notation."""
        prefix = '-' if self.sort_order == SORT_DESC else ''
        return f"{prefix}{self.sort_by}"

    @classmethod
    def normalize(cls, raw_page=None, raw_limit=None, sort_by=None, sort_order=None):
        """
        Coerce page/limit into valid ranges instead of rejecting them.

        page  -> at least 1 (default 1)
        limit -> between 1 and 100 (default 10)
        """
        page = DEFAULT_PAGE if raw_page is None else max(1, raw_page)
        limit = DEFAULT_LIMIT if raw_limit is None else min(max(raw_limit, 1), MAX_LIMIT)
        return cls(
            page=page,
            limit=limit,
            sort_by=sort_by or DEFAULT_SORT_BY,
            sort_order=sort_order or SORT_ASC,
        )

    @classmethod
    def from_query_params(cls, params, sort_fields=(DEFAULT_SORT_BY,), default_sort_order=SORT_ASC):
        """
        Build pagination settings from request query parameters.

        Accepts ``page``, ``limit``, ``sort_by`` and ``sort_order``. Values
        that cannot be coerced (non-integers, unknown sort fields or
        directions) raise ValidationFailure naming the offending parameter.
        """
        issues = []

        page = _parse_int(params.get('page'), 'page', issues)
        limit = _parse_int(params.get('limit'), 'limit', issues)

        sort_by = (params.get('sort_by') or '').strip() or DEFAULT_SORT_BY
        if sort_by not in sort_fields:
            issues.append(FieldIssue(
                'sort_by', 'choice',
                f"Cannot sort by '{sort_by}'. Allowed: {', '.join(sort_fields)}"
            ))

        sort_order = (params.get('sort_order') or '').strip().upper() or default_sort_order
        if sort_order not in SORT_ORDERS:
            issues.append(FieldIssue('sort_order', 'choice', 'sort_order must be ASC or DESC'))

        if issues:
            raise ValidationFailure(issues)

        return cls.normalize(page, limit, sort_by, sort_order)

    def __repr__(self):
        return (
            f"PaginationSpec(page={self.page}, limit={self.limit}, "
            f"sort_by={self.sort_by!r}, sort_order={self.sort_order!r})"
        )


def _parse_int(value, field, issues):
    if value is None or str(value).strip() == '':
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        issues.append(FieldIssue(field, 'integer', f"{field} must be an integer"))
        return None


class PagedResult:
    """One page of rows plus the pagination metadata."""

    def __init__(self, data, page, limit, total):
        self.data = list(data)
        self.page = page
        self.limit = limit
        self.total = total

    @property
    def total_pages(self):
        if self.total <= 0:
            return 0
        return math.ceil(self.total / self.limit)

    @property
    def has_next(self):
        return self.page < self.total_pages

    @property
    def has_prev(self):
        return self.page > 1

    @property
    def meta(self):
        return {
            'page': self.page,
            'limit': self.limit,
            'total': self.total,
            'totalPages': self.total_pages,
            'hasNext': self.has_next,
            'hasPrev': self.has_prev,
        }

    def render(self, serializer_class):
        """Response body: serialized rows under ``data`` and the ``meta`` block."""
        return {
            'data': serializer_class(self.data, many=True).data,
            'meta': self.meta,
        }


def execute_paged_query(source, predicates, pagination):
    """
    Run a paginated query.

    Predicates are ANDed over the whole candidate set, the result is sorted,
    counted, and only then sliced, so the total never depends on the page.
    Ties on the sort key fall back to the primary key.

    Database errors are not caught here.
    """
    queryset = source.filter(*predicates).order_by(pagination.ordering, 'pk')
    total = queryset.count()
    rows = list(queryset[pagination.offset:pagination.offset + pagination.limit])
    return PagedResult(rows, pagination.page, pagination.limit, total)
