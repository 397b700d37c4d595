"""
Base classes for typed responses.

Each operation returns exactly one variant of its response family, for
example ``CacheGet.Hit``, ``CacheGet.Miss`` or ``CacheGet.Error``. Error
variants never carry a payload.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass

from skyvault.client.exceptions import ErrorCode, SdkException


class ResponseBase:
    """Root of every response family."""


@dataclass
class ErrorResponseMixin:
    """
    Error variant state.

    - ``error_code``: classified error kind
    - ``message``: human-readable description
    - ``inner_exception``: the originating SdkException; can be re-raised
    """

    inner_exception: SdkException

    @property
    def error_code(self) -> ErrorCode:
        return self.inner_exception.error_code

    @property
    def message(self) -> str:
        return str(self.inner_exception)

    def raise_error(self) -> None:
        raise self.inner_exception
