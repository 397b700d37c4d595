"""
Responses for persistent storage operations.

Unlike cache items, stored values are typed: a value written as an integer
reads back as an integer, never as bytes.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from skyvault.client.exceptions import InvalidArgumentException
from skyvault.client.responses.base import ErrorResponseMixin, ResponseBase

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class StorageValueType(str, Enum):
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"


@dataclass(frozen=True)
class StorageValue:
    """
    A typed stored value.

    Build one with ``StorageValue.of(...)`` to infer the type from a Python
    value, or with the ``of_*`` constructors to pin it. Integers are signed
    64-bit.
    """

    type: StorageValueType
    value: Union[int, float, str, bytes]

    @classmethod
    def of_int(cls, value: int) -> "StorageValue":
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentException(f"Expected an int, got {type(value).__name__}")
        if not INT64_MIN <= value <= INT64_MAX:
            raise InvalidArgumentException("Integer values must fit in 64 bits")
        return cls(StorageValueType.INTEGER, value)

    @classmethod
    def of_double(cls, value: float) -> "StorageValue":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidArgumentException(f"Expected a float, got {type(value).__name__}")
        return cls(StorageValueType.DOUBLE, float(value))

    @classmethod
    def of_string(cls, value: str) -> "StorageValue":
        if not isinstance(value, str):
            raise InvalidArgumentException(f"Expected a str, got {type(value).__name__}")
        return cls(StorageValueType.STRING, value)

    @classmethod
    def of_bytes(cls, value: bytes) -> "StorageValue":
        if not isinstance(value, bytes):
            raise InvalidArgumentException(f"Expected bytes, got {type(value).__name__}")
        return cls(StorageValueType.BYTES, value)

    @classmethod
    def of(cls, value: "StorageValue | int | float | str | bytes") -> "StorageValue":
        if isinstance(value, StorageValue):
            return value
        if isinstance(value, bool):
            raise InvalidArgumentException("bool is not a storable type")
        if isinstance(value, int):
            return cls.of_int(value)
        if isinstance(value, float):
            return cls.of_double(value)
        if isinstance(value, str):
            return cls.of_string(value)
        if isinstance(value, bytes):
            return cls.of_bytes(value)
        raise InvalidArgumentException(
            f"Storage values must be int, float, str or bytes, got {type(value).__name__}"
        )

    def int_value(self) -> int | None:
        return self.value if self.type == StorageValueType.INTEGER else None

    def double_value(self) -> float | None:
        return self.value if self.type == StorageValueType.DOUBLE else None

    def string_value(self) -> str | None:
        return self.value if self.type == StorageValueType.STRING else None

    def bytes_value(self) -> bytes | None:
        return self.value if self.type == StorageValueType.BYTES else None


class StorageGetResponse(ResponseBase):
    """Parent of StorageGet.Success, StorageGet.NotFound and StorageGet.Error."""


class StorageGet:
    @dataclass
    class Success(StorageGetResponse):
        """The key was found; ``value`` keeps the type it was written with."""

        value: StorageValue

        @property
        def value_int(self) -> int | None:
            return self.value.int_value()

        @property
        def value_double(self) -> float | None:
            return self.value.double_value()

        @property
        def value_string(self) -> str | None:
            return self.value.string_value()

        @property
        def value_bytes(self) -> bytes | None:
            return self.value.bytes_value()

    @dataclass
    class NotFound(StorageGetResponse):
        """The store exists but holds no value for the key."""

    class Error(StorageGetResponse, ErrorResponseMixin):
        """The get failed, including when the store itself does not exist."""


class StoragePutResponse(ResponseBase):
    """Parent of StoragePut.Success and StoragePut.Error."""


class StoragePut:
    @dataclass
    class Success(StoragePutResponse):
        """The value was stored, replacing any previous value and type."""

    class Error(StoragePutResponse, ErrorResponseMixin):
        """The put failed."""


class StorageDeleteResponse(ResponseBase):
    """Parent of StorageDelete.Success and StorageDelete.Error."""


class StorageDelete:
    @dataclass
    class Success(StorageDeleteResponse):
        """The key was deleted, or was not present."""

    class Error(StorageDeleteResponse, ErrorResponseMixin):
        """The delete failed."""


class CreateStoreResponse(ResponseBase):
    """Parent of the CreateStore variants."""


class CreateStore:
    @dataclass
    class Success(CreateStoreResponse):
        """The store was created."""

    @dataclass
    class StoreAlreadyExists(CreateStoreResponse):
        """A store with this name already exists; treated as a non-error outcome."""

    class Error(CreateStoreResponse, ErrorResponseMixin):
        """The store could not be created."""


class DeleteStoreResponse(ResponseBase):
    """Parent of the DeleteStore variants."""


class DeleteStore:
    @dataclass
    class Success(DeleteStoreResponse):
        """The store and everything in it were deleted."""

    class Error(DeleteStoreResponse, ErrorResponseMixin):
        """The store could not be deleted."""


@dataclass
class StoreInfo:
    name: str


class ListStoresResponse(ResponseBase):
    """Parent of the ListStores variants."""


class ListStores:
    @dataclass
    class Success(ListStoresResponse):
        """One page of stores; ``next_token`` is empty on the last page."""

        stores: list[StoreInfo] = field(default_factory=list)
        next_token: str = ""

        @property
        def store_names(self) -> list[str]:
            return [store.name for store in self.stores]

    class Error(ListStoresResponse, ErrorResponseMixin):
        """Listing failed."""
