"""
API Error Handling

Error taxonomy shared by every app and the DRF exception handler that turns
it into a uniform JSON payload:

- EntityNotFound        -> 404
- Conflict              -> 409
- ValidationFailure     -> 400 (carries the list of violated fields)
- InfrastructureFailure -> 500 (database unreachable / query failure)
"""

import logging

from django.db import DatabaseError
from django.http import Http404
from django.utils import timezone
from rest_framework import exceptions, status
from rest_framework.exceptions import ErrorDetail
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class FieldIssue:
    """A single violated rule on a single input field."""

    __slots__ = ('field', 'rule', 'message')

    def __init__(self, field, rule, message):
        self.field = field
        self.rule = rule
        self.message = message

    def as_dict(self):
        return {'field': self.field, 'rule': self.rule, 'message': self.message}

    def __eq__(self, other):
        if not isinstance(other, FieldIssue):
            return NotImplemented
        return (self.field, self.rule, self.message) == (other.field, other.rule, other.message)

    def __hash__(self):
        return hash((self.field, self.rule, self.message))

    def __repr__(self):
        return f"FieldIssue({self.field!r}, {self.rule!r}, {self.message!r})"


class DomainError(exceptions.APIException):
    """Base class for errors raised by the service layer."""
    error_name = 'Error'


class EntityNotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'not_found'
    error_name = 'Not Found'

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'
    error_name = 'Conflict'


class ValidationFailure(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation failed.'
    default_code = 'invalid'
    error_name = 'Bad Request'

    def __init__(self, issues, message=None):
        self.issues = list(issues)
        if message is None:
            fields = ', '.join(sorted({issue.field for issue in self.issues}))
            message = f"Validation failed: {fields}" if fields else self.default_detail
        super().__init__(message)

    @classmethod
    def single(cls, field, rule, message):
        return cls([FieldIssue(field, rule, message)])


class InfrastructureFailure(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error.'
    default_code = 'infrastructure_error'
    error_name = 'Internal Server Error'


# =============================================================================
# ERROR DETAIL CONVERSION
# =============================================================================

def issues_from_error_detail(detail, prefix=''):
    """
    Flatten DRF/Django error details into FieldIssue objects.

    Nested serializer errors are reported with dotted field names
    (``producer.document``); list positions become indices.
    """
    issues = []

    if isinstance(detail, dict):
        for field, value in detail.items():
            name = f"{prefix}.{field}" if prefix else str(field)
            issues.extend(issues_from_error_detail(value, name))
    elif isinstance(detail, (list, tuple)):
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list, tuple)):
                issues.extend(issues_from_error_detail(value, f"{prefix}.{index}" if prefix else str(index)))
            else:
                issues.extend(issues_from_error_detail(value, prefix))
    else:
        rule = getattr(detail, 'code', None) or 'invalid'
        issues.append(FieldIssue(prefix or 'non_field_errors', rule, str(detail)))

    return issues


def as_validation_error(issues):
    """Wrap FieldIssue objects in a DRF ValidationError, keeping each rule as the error code."""
    detail = {}
    for issue in issues:
        detail.setdefault(issue.field, []).append(ErrorDetail(issue.message, code=issue.rule))
    return exceptions.ValidationError(detail)


def ensure_valid(serializer):
    """Run serializer validation, raising ValidationFailure with every violated field."""
    if not serializer.is_valid():
        raise ValidationFailure(issues_from_error_detail(serializer.errors))
    return serializer.validated_data


def issues_from_form_errors(errors):
    """Convert a Django ``form.errors`` mapping into FieldIssue objects."""
    issues = []
    for field, error_list in errors.as_data().items():
        for error in error_list:
            for message in error.messages:
                issues.append(FieldIssue(field, error.code or 'invalid', message))
    return issues


# =============================================================================
# DRF EXCEPTION HANDLER
# =============================================================================

def _error_payload(exc, request, message):
    payload = {
        'statusCode': exc.status_code,
        'error': getattr(exc, 'error_name', None) or exc.__class__.__name__,
        'message': message,
        'path': request.path if request is not None else None,
        'timestamp': timezone.now().isoformat(),
    }
    if isinstance(exc, ValidationFailure):
        payload['fields'] = [issue.as_dict() for issue in exc.issues]
    return payload


def api_exception_handler(exc, context):
    """
    Map every exception raised inside a view to the API error payload.

    Database errors are logged with their original message and traceback,
    then reported to the client as a generic infrastructure failure.
    """
    request = context.get('request')
    method = request.method if request is not None else '-'
    path = request.path if request is not None else '-'

    if isinstance(exc, DatabaseError):
        logger.error(f"{method} {path} - database failure: {exc}", exc_info=exc)
        exc = InfrastructureFailure()
    elif isinstance(exc, exceptions.ValidationError):
        exc = ValidationFailure(issues_from_error_detail(exc.detail))
    elif isinstance(exc, Http404):
        exc = exceptions.NotFound()

    if not isinstance(exc, exceptions.APIException):
        # Let DRF / Django deal with anything we do not know about
        return exception_handler(exc, context)

    if isinstance(exc, ValidationFailure):
        message = str(exc.detail)
    elif isinstance(exc.detail, (dict, list)):
        message = str(exc.default_detail)
    else:
        message = str(exc.detail)

    if exc.status_code >= 500:
        logger.error(f"{method} {path} - Status: {exc.status_code} - Message: {message}")
    else:
        logger.warning(f"{method} {path} - Status: {exc.status_code} - Message: {message}")

    headers = {}
    if getattr(exc, 'auth_header', None):
        headers['WWW-Authenticate'] = exc.auth_header
    if getattr(exc, 'wait', None):
        headers['Retry-After'] = '%d' % exc.wait

    set_rollback()
    return Response(_error_payload(exc, request, message), status=exc.status_code, headers=headers)
