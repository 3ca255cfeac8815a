"""
Filter compilation for list endpoints.

Each app declares its filters as a django-filter FilterSet. FilterCompiler
validates the raw query parameters against that FilterSet and turns every
present value into one predicate (a ``Q`` object or an ``Exists``
expression). The predicates are ANDed by the paged query executor.
"""

from django.core.validators import EMPTY_VALUES
from django.db.models import Exists, OuterRef, Q
import django_filters

from .exceptions import ValidationFailure, issues_from_form_errors


class RelatedExistsMixin:
    """
    Marks a filter whose field path crosses a to-many relation.

    The compiled predicate matches a row when at least one related row
    satisfies the lookup, instead of joining and comparing every row.
    """
    existential = True


class RelatedExistsNumberFilter(RelatedExistsMixin, django_filters.NumberFilter):
    pass


class RelatedExistsUUIDFilter(RelatedExistsMixin, django_filters.UUIDFilter):
    pass


class FilterCompiler:
    """Compiles query parameters into an ordered list of predicates."""

    def __init__(self, filterset_class):
        self.filterset_class = filterset_class

    @property
    def model(self):
        return self.filterset_class._meta.model

    def compile(self, params):
        """
        Return one predicate per present filter, in declaration order.

        Missing and blank values are skipped. Values the FilterSet form
        rejects raise ValidationFailure.
        """
        filterset = self.filterset_class(data=params, queryset=self.model._default_manager.none())

        if not filterset.is_valid():
            raise ValidationFailure(issues_from_form_errors(filterset.form.errors))

        cleaned = filterset.form.cleaned_data
        predicates = []
        for name, filter_ in filterset.filters.items():
            value = cleaned.get(name)
            if value in EMPTY_VALUES:
                continue
            predicates.append(self.compile_filter(filter_, value))
        return predicates

    def compile_filter(self, filter_, value):
        lookup = f"{filter_.field_name}__{filter_.lookup_expr}"
        if getattr(filter_, 'existential', False):
            matching = self.model._default_manager.filter(pk=OuterRef('pk'), **{lookup: value})
            return Exists(matching)
        return Q(**{lookup: value})
