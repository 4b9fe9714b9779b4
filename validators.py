"""
Input Validation & Sanitization Utilities
Validation for job ids, calendar parameters and small JSON request bodies
"""
import re
from datetime import date
from typing import Dict, Any, Optional, Tuple
from werkzeug.utils import secure_filename
import logging

logger = logging.getLogger(__name__)

# Regex patterns
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
PHONE_PATTERN = re.compile(r'^\+?1?\d{9,15}$')
DOCUMENT_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')
ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

MAX_DOCUMENT_ID_LENGTH = 128
MIN_CALENDAR_YEAR = 1970
MAX_CALENDAR_YEAR = 2100

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}


class ValidationError(Exception):
    """Custom exception for validation errors"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


def validate_email(email: str) -> Tuple[bool, Optional[str]]:
    """
    Validate email format

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not email or not isinstance(email, str):
        return False, "Email must be a non-empty string"

    if not EMAIL_PATTERN.match(email):
        return False, "Invalid email format"

    if len(email) > 254:  # RFC 5321
        return False, "Email address too long"

    return True, None


def validate_phone(phone: str) -> Tuple[bool, Optional[str]]:
    """
    Validate phone number format

    Args:
        phone: Phone number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not phone or not isinstance(phone, str):
        return False, "Phone must be a non-empty string"

    cleaned_phone = re.sub(r'[\s\-\(\)\.]', '', phone)

    if not PHONE_PATTERN.match(cleaned_phone):
        return False, "Invalid phone number format"

    return True, None


def validate_document_id(document_id: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a job document identifier taken from the URL

    Args:
        document_id: Identifier to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not document_id or not isinstance(document_id, str):
        return False, "Job id must be a non-empty string"

    if len(document_id) > MAX_DOCUMENT_ID_LENGTH:
        return False, f"Job id too long (maximum {MAX_DOCUMENT_ID_LENGTH} characters)"

    if not DOCUMENT_ID_PATTERN.match(document_id):
        return False, "Job id may only contain letters, digits, '-' and '_'"

    return True, None


def validate_iso_date(value: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a calendar day written as YYYY-MM-DD

    Args:
        value: Date string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not value or not isinstance(value, str):
        return False, "Date must be a non-empty string"

    if not ISO_DATE_PATTERN.match(value):
        return False, "Date must use the YYYY-MM-DD format"

    try:
        date.fromisoformat(value)
    except ValueError:
        return False, f"Invalid calendar date: {value}"

    return True, None


def parse_iso_date(value: str, field: str = 'date') -> date:
    """
    Parse a YYYY-MM-DD string or raise ValidationError

    Args:
        value: Date string
        field: Field name reported in the error

    Returns:
        The parsed date
    """
    is_valid, error = validate_iso_date(value)
    if not is_valid:
        raise ValidationError(error, field)
    return date.fromisoformat(value)


def validate_month(year: int, month: int) -> Tuple[bool, Optional[str]]:
    """
    Validate a calendar year/month pair

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(year, int) or not isinstance(month, int):
        return False, "Year and month must be integers"

    if not MIN_CALENDAR_YEAR <= year <= MAX_CALENDAR_YEAR:
        return False, f"Year must be between {MIN_CALENDAR_YEAR} and {MAX_CALENDAR_YEAR}"

    if not 1 <= month <= 12:
        return False, "Month must be between 1 and 12"

    return True, None


def parse_bool(value: Any, default: Optional[bool] = None, field: str = 'value') -> Optional[bool]:
    """
    Parse a boolean from JSON or a query string

    Accepts real booleans and the strings true/false, yes/no, on/off, 1/0.
    Missing values return the default.

    Raises:
        ValidationError: If the value is not recognisable as a boolean
    """
    if value is None or value == '':
        return default

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False

    raise ValidationError(f"{field} must be a boolean", field)


def parse_positive_int(value: Any, field: str, maximum: Optional[int] = None) -> Optional[int]:
    """
    Parse an optional positive integer query parameter

    Raises:
        ValidationError: If the value is not a positive integer or exceeds the maximum
    """
    if value is None or value == '':
        return None

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer", field)

    if number < 1:
        raise ValidationError(f"{field} must be at least 1", field)

    if maximum is not None and number > maximum:
        raise ValidationError(f"{field} must be at most {maximum}", field)

    return number


def validate_completion_request(data: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate the body of a completion update

    Args:
        data: Request data dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(data, dict):
        return False, "Request body must be a JSON object"

    for field in ('completed', 'reformat_date'):
        if field in data and not isinstance(data[field], bool):
            return False, f"{field} must be a boolean"

    return True, None


def sanitize_filename(filename: str, default: str = 'file') -> str:
    """
    Sanitize filename to prevent directory traversal attacks

    Args:
        filename: Original filename
        default: Name used when nothing safe is left

    Returns:
        Sanitized filename
    """
    safe_name = secure_filename(filename or '')

    if not safe_name:
        safe_name = default

    return safe_name


def format_validation_error(field: Optional[str], message: str) -> Dict[str, Any]:
    """
    Format validation error for consistent API responses

    Args:
        field: Field name that failed validation
        message: Error message

    Returns:
        Error response dictionary
    """
    return {
        'success': False,
        'error': 'Validation Error',
        'field': field,
        'message': message
    }
