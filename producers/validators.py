"""
Producer document validation.

Only the structure of a document is checked here (digit count per document
type). Check-digit verification is delegated to the callable configured in
``settings.DOCUMENT_CHECKSUM_VALIDATOR``.
"""
import re

from django.conf import settings
from django.utils.module_loading import import_string

from core.exceptions import FieldIssue
from .models import Producer

DOCUMENT_LENGTHS = {
    Producer.CPF: 11,
    Producer.CNPJ: 14,
}


def normalize_document(document):
    """Strip punctuation and whitespace, keeping digits only."""
    return re.sub(r'\D', '', document or '')


def get_checksum_validator():
    path = getattr(settings, 'DOCUMENT_CHECKSUM_VALIDATOR', '')
    if not path:
        return None
    return import_string(path)


def validate_document(document, document_type):
    """
    Check a producer document against its declared type.

    Returns a list of FieldIssue; an empty list means the document is valid.
    """
    issues = []
    digits = normalize_document(document)

    if not digits:
        issues.append(FieldIssue('document', 'required', 'Document must not be empty.'))
        return issues

    expected_length = DOCUMENT_LENGTHS.get(document_type)
    if expected_length is None:
        # document_type itself is reported by the serializer
        return issues

    if len(digits) != expected_length:
        issues.append(FieldIssue(
            'document', 'length',
            f"A {document_type} must have {expected_length} digits, got {len(digits)}."
        ))
        return issues

    checksum_is_valid = get_checksum_validator()
    if checksum_is_valid is not None and not checksum_is_valid(digits, document_type):
        issues.append(FieldIssue('document', 'checksum', f"Invalid {document_type} check digits."))

    return issues
