"""
Tests for the API error payload.
"""
import pytest
from django.db import OperationalError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.test import APIRequestFactory

from core.exceptions import (
    Conflict, EntityNotFound, FieldIssue, InfrastructureFailure, ValidationFailure,
    api_exception_handler, as_validation_error, issues_from_error_detail,
)


@pytest.fixture
def context():
    request = APIRequestFactory().get('/api/farms/')
    return {'request': request, 'view': None}


class TestApiExceptionHandler:

    def test_not_found_payload(self, context):
        response = api_exception_handler(EntityNotFound('Farm', 'abc'), context)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['statusCode'] == 404
        assert response.data['error'] == 'Not Found'
        assert response.data['message'] == 'Farm with ID abc not found'
        assert response.data['path'] == '/api/farms/'
        assert 'timestamp' in response.data
        assert 'fields' not in response.data

    def test_conflict(self, context):
        response = api_exception_handler(Conflict('Producer with document 1 already exists'), context)
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'Conflict'

    def test_validation_failure_lists_fields(self, context):
        exc = ValidationFailure([FieldIssue('arable_area', 'land_use', 'Too big')])
        response = api_exception_handler(exc, context)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'] == [{'field': 'arable_area', 'rule': 'land_use', 'message': 'Too big'}]

    def test_drf_validation_error_is_converted(self, context):
        exc = ValidationError({'state': ['This field is required.']})
        response = api_exception_handler(exc, context)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['field'] == 'state'

    def test_database_error_becomes_infrastructure_failure(self, context):
        response = api_exception_handler(OperationalError('connection refused'), context)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Internal Server Error'
        assert 'connection refused' not in response.data['message']

    def test_unknown_exception_is_left_to_django(self, context):
        assert api_exception_handler(RuntimeError('boom'), context) is None

    def test_infrastructure_failure_status(self):
        assert InfrastructureFailure().status_code == 500


class TestErrorDetailConversion:

    def test_rule_comes_from_error_code(self):
        error = as_validation_error([FieldIssue('document', 'length', 'Eleven digits')])
        issues = issues_from_error_detail(error.detail)
        assert issues == [FieldIssue('document', 'length', 'Eleven digits')]

    def test_nested_errors_use_dotted_names(self):
        issues = issues_from_error_detail({'producer': {'document': ['bad']}})
        assert issues[0].field == 'producer.document'
