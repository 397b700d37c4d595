"""
Responses for dictionary, set and list operations.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass, field

from skyvault.client.responses.base import ErrorResponseMixin, ResponseBase


def _decode_all(values) -> list[str]:
    return [value.decode("utf-8") for value in values]


# Dictionary

class DictionarySetFieldsResponse(ResponseBase):
    """Parent of the DictionarySetFields variants."""


class DictionarySetFields:
    @dataclass
    class Success(DictionarySetFieldsResponse):
        """The fields were stored."""

    class Error(DictionarySetFieldsResponse, ErrorResponseMixin):
        """The fields could not be stored."""


class DictionaryGetFieldResponse(ResponseBase):
    """Parent of the DictionaryGetField variants."""


class DictionaryGetField:
    @dataclass
    class Hit(DictionaryGetFieldResponse):
        field_bytes: bytes
        value_bytes: bytes

        @property
        def field_string(self) -> str:
            return self.field_bytes.decode("utf-8")

        @property
        def value_string(self) -> str:
            return self.value_bytes.decode("utf-8")

    @dataclass
    class Miss(DictionaryGetFieldResponse):
        """The dictionary or the field does not exist."""

    class Error(DictionaryGetFieldResponse, ErrorResponseMixin):
        """The lookup failed."""


class DictionaryGetFieldsResponse(ResponseBase):
    """Parent of the DictionaryGetFields variants."""


class DictionaryGetFields:
    @dataclass
    class Hit(DictionaryGetFieldsResponse):
        """Per-field results in request order; missing fields are DictionaryGetField.Miss."""

        responses: list[DictionaryGetFieldResponse] = field(default_factory=list)

        @property
        def value_dictionary_bytes_bytes(self) -> dict[bytes, bytes]:
            return {
                response.field_bytes: response.value_bytes
                for response in self.responses
                if isinstance(response, DictionaryGetField.Hit)
            }

        @property
        def value_dictionary_string_string(self) -> dict[str, str]:
            return {
                field_bytes.decode("utf-8"): value.decode("utf-8")
                for field_bytes, value in self.value_dictionary_bytes_bytes.items()
            }

    @dataclass
    class Miss(DictionaryGetFieldsResponse):
        """The dictionary does not exist."""

    class Error(DictionaryGetFieldsResponse, ErrorResponseMixin):
        """The lookup failed."""


class DictionaryFetchResponse(ResponseBase):
    """Parent of the DictionaryFetch variants."""


class DictionaryFetch:
    @dataclass
    class Hit(DictionaryFetchResponse):
        value_dictionary_bytes_bytes: dict[bytes, bytes] = field(default_factory=dict)

        @property
        def value_dictionary_string_string(self) -> dict[str, str]:
            return {
                key.decode("utf-8"): value.decode("utf-8")
                for key, value in self.value_dictionary_bytes_bytes.items()
            }

    @dataclass
    class Miss(DictionaryFetchResponse):
        """The dictionary does not exist."""

    class Error(DictionaryFetchResponse, ErrorResponseMixin):
        """The fetch failed."""


class DictionaryRemoveFieldsResponse(ResponseBase):
    """Parent of the DictionaryRemoveFields variants."""


class DictionaryRemoveFields:
    @dataclass
    class Success(DictionaryRemoveFieldsResponse):
        """The fields were removed, or were not present."""

    class Error(DictionaryRemoveFieldsResponse, ErrorResponseMixin):
        """The removal failed."""


# Set

class SetAddElementsResponse(ResponseBase):
    """Parent of the SetAddElements variants."""


class SetAddElements:
    @dataclass
    class Success(SetAddElementsResponse):
        """The elements were added."""

    class Error(SetAddElementsResponse, ErrorResponseMixin):
        """The elements could not be added."""


class SetFetchResponse(ResponseBase):
    """Parent of the SetFetch variants."""


class SetFetch:
    @dataclass
    class Hit(SetFetchResponse):
        value_set_bytes: set[bytes] = field(default_factory=set)

        @property
        def value_set_string(self) -> set[str]:
            return set(_decode_all(self.value_set_bytes))

    @dataclass
    class Miss(SetFetchResponse):
        """The set does not exist."""

    class Error(SetFetchResponse, ErrorResponseMixin):
        """The fetch failed."""


class SetRemoveElementsResponse(ResponseBase):
    """Parent of the SetRemoveElements variants."""


class SetRemoveElements:
    @dataclass
    class Success(SetRemoveElementsResponse):
        """The elements were removed, or were not present."""

    class Error(SetRemoveElementsResponse, ErrorResponseMixin):
        """The removal failed."""


# List

class ListConcatenateBackResponse(ResponseBase):
    """Parent of the ListConcatenateBack variants."""


class ListConcatenateBack:
    @dataclass
    class Success(ListConcatenateBackResponse):
        list_length: int

    class Error(ListConcatenateBackResponse, ErrorResponseMixin):
        """The values could not be appended."""


class ListConcatenateFrontResponse(ResponseBase):
    """Parent of the ListConcatenateFront variants."""


class ListConcatenateFront:
    @dataclass
    class Success(ListConcatenateFrontResponse):
        list_length: int

    class Error(ListConcatenateFrontResponse, ErrorResponseMixin):
        """The values could not be prepended."""


class ListFetchResponse(ResponseBase):
    """Parent of the ListFetch variants."""


class ListFetch:
    @dataclass
    class Hit(ListFetchResponse):
        value_list_bytes: list[bytes] = field(default_factory=list)

        @property
        def value_list_string(self) -> list[str]:
            return _decode_all(self.value_list_bytes)

    @dataclass
    class Miss(ListFetchResponse):
        """The list does not exist."""

    class Error(ListFetchResponse, ErrorResponseMixin):
        """The fetch failed."""


class ListPopFrontResponse(ResponseBase):
    """Parent of the ListPopFront variants."""


class ListPopFront:
    @dataclass
    class Hit(ListPopFrontResponse):
        value_bytes: bytes

        @property
        def value_string(self) -> str:
            return self.value_bytes.decode("utf-8")

    @dataclass
    class Miss(ListPopFrontResponse):
        """The list does not exist."""

    class Error(ListPopFrontResponse, ErrorResponseMixin):
        """The pop failed."""


class ListPopBackResponse(ResponseBase):
    """Parent of the ListPopBack variants."""


class ListPopBack:
    @dataclass
    class Hit(ListPopBackResponse):
        value_bytes: bytes

        @property
        def value_string(self) -> str:
            return self.value_bytes.decode("utf-8")

    @dataclass
    class Miss(ListPopBackResponse):
        """The list does not exist."""

    class Error(ListPopBackResponse, ErrorResponseMixin):
        """The pop failed."""


class ListLengthResponse(ResponseBase):
    """Parent of the ListLength variants."""


class ListLength:
    @dataclass
    class Hit(ListLengthResponse):
        length: int

    @dataclass
    class Miss(ListLengthResponse):
        """The list does not exist."""

    class Error(ListLengthResponse, ErrorResponseMixin):
        """The length lookup failed."""
