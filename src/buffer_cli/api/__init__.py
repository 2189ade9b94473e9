"""Buffer API request layer."""

from .client import BASE_URL, build_url, encode_form_body, request, with_retry
from .errors import BufferAPIError, ErrorCode
from .models import RequestOptions

__all__ = [
    "BASE_URL",
    "build_url",
    "encode_form_body",
    "request",
    "with_retry",
    "BufferAPIError",
    "ErrorCode",
    "RequestOptions",
]
