"""``httpx`` engine for the s3lite HTTP contract."""

from .adapter import DEFAULT_CONTENT_TYPE, HttpxSdkHttpClient
from .stream import ResponseBodyStream

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "HttpxSdkHttpClient",
    "ResponseBodyStream",
]
