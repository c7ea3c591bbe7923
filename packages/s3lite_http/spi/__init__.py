"""Public transport-agnostic HTTP contract for s3lite clients."""

from .client import SdkHttpClient
from .errors import (
    HttpClientError,
    HttpError,
    HttpRequestError,
    MalformedRequestError,
    UnknownStatusCodeError,
    UnsupportedMethodError,
)
from .request import (
    HttpMethod,
    ImmutableRequest,
    MultiValueMap,
    RequestBody,
    RequestBuilder,
)
from .response import ImmutableResponse
from .status import from_status_code, is_success
from .utils import (
    close_quietly,
    first_header,
    header_values,
    to_query_string,
    url_encode,
)

__all__ = [
    "HttpClientError",
    "HttpError",
    "HttpMethod",
    "HttpRequestError",
    "ImmutableRequest",
    "ImmutableResponse",
    "MalformedRequestError",
    "MultiValueMap",
    "RequestBody",
    "RequestBuilder",
    "SdkHttpClient",
    "UnknownStatusCodeError",
    "UnsupportedMethodError",
    "close_quietly",
    "first_header",
    "from_status_code",
    "header_values",
    "is_success",
    "to_query_string",
    "url_encode",
]
