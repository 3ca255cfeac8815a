"""
Tests for pagination bounds, page metadata and the paged query executor.
"""
import pytest

from core.exceptions import ValidationFailure
from core.pagination import (
    MAX_LIMIT, PagedResult, PaginationSpec, SORT_ASC, SORT_DESC, execute_paged_query,
)


class TestPaginationSpecNormalize:

    def test_defaults(self):
        spec = PaginationSpec.normalize()
        assert spec.page == 1
        assert spec.limit == 10
        assert spec.offset == 0
        assert spec.sort_by == 'created_at'

    @pytest.mark.parametrize('raw_page, expected', [(0, 1), (-5, 1), (1, 1), (7, 7)])
    def test_page_is_at_least_one(self, raw_page, expected):
        assert PaginationSpec.normalize(raw_page=raw_page).page == expected

    @pytest.mark.parametrize('raw_limit, expected', [(0, 1), (-1, 1), (50, 50), (100, 100), (1000, MAX_LIMIT)])
    def test_limit_is_clamped(self, raw_limit, expected):
        assert PaginationSpec.normalize(raw_limit=raw_limit).limit == expected

    def test_offset(self):
        spec = PaginationSpec.normalize(raw_page=3, raw_limit=20)
        assert spec.offset == 40

    def test_ordering(self):
        assert PaginationSpec.normalize(sort_by='farm_name', sort_order=SORT_DESC).ordering == '-farm_name'
        assert PaginationSpec.normalize(sort_by='farm_name', sort_order=SORT_ASC).ordering == 'farm_name'


class TestPaginationSpecFromQueryParams:

    def test_parses_and_clamps(self):
        spec = PaginationSpec.from_query_params(
            {'page': '0', 'limit': '500', 'sort_by': 'name', 'sort_order': 'desc'},
            sort_fields=('created_at', 'name'),
        )
        assert (spec.page, spec.limit, spec.sort_by, spec.sort_order) == (1, 100, 'name', SORT_DESC)

    def test_blank_values_use_defaults(self):
        spec = PaginationSpec.from_query_params({'page': '', 'limit': ' '}, default_sort_order=SORT_DESC)
        assert (spec.page, spec.limit, spec.sort_order) == (1, 10, SORT_DESC)

    def test_non_integer_page_is_rejected(self):
        with pytest.raises(ValidationFailure) as exc_info:
            PaginationSpec.from_query_params({'page': 'two', 'limit': 'x'})
        assert {issue.field for issue in exc_info.value.issues} == {'page', 'limit'}

    def test_unknown_sort_field_is_rejected(self):
        with pytest.raises(ValidationFailure) as exc_info:
            PaginationSpec.from_query_params({'sort_by': 'password'}, sort_fields=('created_at',))
        assert exc_info.value.issues[0].field == 'sort_by'

    def test_unknown_sort_order_is_rejected(self):
        with pytest.raises(ValidationFailure) as exc_info:
            PaginationSpec.from_query_params({'sort_order': 'sideways'})
        assert exc_info.value.issues[0].field == 'sort_order'


class TestPagedResult:

    def test_meta_for_middle_page(self):
        result = PagedResult(data=[1, 2, 3], page=2, limit=3, total=10)
        assert result.meta == {
            'page': 2,
            'limit': 3,
            'total': 10,
            'totalPages': 4,
            'hasNext': True,
            'hasPrev': True,
        }

    def test_empty_result(self):
        result = PagedResult(data=[], page=1, limit=10, total=0)
        assert result.total_pages == 0
        assert result.has_next is False
        assert result.has_prev is False

    def test_last_page(self):
        result = PagedResult(data=[1], page=3, limit=5, total=11)
        assert result.total_pages == 3
        assert result.has_next is False

    def test_page_past_the_end(self):
        result = PagedResult(data=[], page=9, limit=5, total=11)
        assert result.has_next is False
        assert result.has_prev is True


@pytest.mark.django_db
class TestExecutePagedQuery:

    def test_second_page_of_25(self, make_producer):
        """25 matching rows, page 2 with limit 10 returns rows 11-20."""
        from producers.models import Producer

        for index in range(25):
            make_producer(producer_name=f'Producer {index:02d}')

        spec = PaginationSpec.normalize(raw_page=2, raw_limit=10, sort_by='producer_name', sort_order=SORT_ASC)
        result = execute_paged_query(Producer.objects.all(), [], spec)

        assert result.total == 25
        assert [p.producer_name for p in result.data] == [f'Producer {i:02d}' for i in range(10, 20)]
        assert result.meta['totalPages'] == 3
        assert result.meta['hasNext'] is True
        assert result.meta['hasPrev'] is True

    def test_total_counts_filtered_rows_not_the_page(self, make_farm):
        from django.db.models import Q
        from farms.models import Farm

        for _ in range(4):
            make_farm(state='SP')
        make_farm(state='MG')

        spec = PaginationSpec.normalize(raw_page=1, raw_limit=2)
        result = execute_paged_query(Farm.objects.all(), [Q(state='SP')], spec)

        assert result.total == 4
        assert len(result.data) == 2

    def test_ties_are_broken_by_primary_key(self, make_producer):
        from producers.models import Producer

        for _ in range(5):
            make_producer(producer_name='Same Name')

        ids = sorted(Producer.objects.values_list('pk', flat=True))
        spec = PaginationSpec.normalize(raw_limit=100, sort_by='producer_name')
        result = execute_paged_query(Producer.objects.all(), [], spec)

        assert [p.pk for p in result.data] == ids
