"""
Date-aware JSON decoding.

Dates travel as strings in a fixed pattern (``2023-06-08T16:41:51Z``). Every
``datetime`` reachable from the decoded type is parsed with ``date_from_string``
and the decode fails if the string does not match, instead of falling back to a
default or to pydantic's lenient datetime parsing. Fields declared as
``CustomDate`` carry the strict parser themselves; plain ``datetime`` fields get
it from ``with_strict_dates`` at decode time.
"""

import types
from datetime import datetime, timezone
from functools import lru_cache
from typing import (
    Any,
    Annotated,
    FrozenSet,
    Literal,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin
)

from pydantic import BaseModel, BeforeValidator, PlainSerializer, TypeAdapter, create_model

T = TypeVar("T")

DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DATE_FORMATS: Tuple[str, ...] = (DATE_FORMAT, "%Y-%m-%dT%H:%M:%S.%fZ")


def date_from_string(value: str) -> datetime:
    """
    Parse a wire date string into a timezone-aware UTC datetime.

    Args:
        value: Date string such as "2023-06-08T16:41:51Z"

    Returns:
        datetime in UTC

    Raises:
        ValueError: If the string matches none of the accepted patterns
    """
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise ValueError(f"Date string {value!r} does not match expected format {DATE_FORMAT}")


def date_to_string(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT)


def _validate_custom_date(value: Any) -> datetime:
    # Already-parsed values come from Python-side construction, never from JSON
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a date string, got {type(value).__name__}")
    return date_from_string(value)


CustomDate = Annotated[
    datetime,
    BeforeValidator(_validate_custom_date),
    PlainSerializer(date_to_string, return_type=str, when_used="json"),
]


def _is_custom_date_field(field) -> bool:
    return any(getattr(m, "func", None) is _validate_custom_date for m in field.metadata)


def with_strict_dates(decoding_type: Any, _seen: Optional[FrozenSet[type]] = None) -> Any:
    """
    Rewrite a type so that every plain ``datetime`` in it becomes ``CustomDate``.

    Containers, unions, ``Annotated`` wrappers and pydantic models are walked
    recursively. A model with plain ``datetime`` fields is replaced by a
    subclass overriding only those fields. Types without any plain
    ``datetime`` come back unchanged (the same object).
    """
    _seen = _seen or frozenset()

    if decoding_type is datetime:
        return CustomDate

    if isinstance(decoding_type, type) and issubclass(decoding_type, BaseModel):
        if decoding_type in _seen:
            return decoding_type
        _seen = _seen | {decoding_type}
        overrides = {}
        for name, field in decoding_type.model_fields.items():
            # pydantic moves CustomDate's validators into the field metadata
            if field.annotation is datetime and _is_custom_date_field(field):
                continue
            annotation = with_strict_dates(field.annotation, _seen)
            if annotation is not field.annotation:
                overrides[name] = (annotation, field)
        if not overrides:
            return decoding_type
        return create_model(decoding_type.__name__, __base__=decoding_type, **overrides)

    origin = get_origin(decoding_type)
    if origin is None or origin is Literal:
        return decoding_type

    args = get_args(decoding_type)
    if origin is Annotated:
        if decoding_type == CustomDate:
            return decoding_type
        inner = with_strict_dates(args[0], _seen)
        if inner is args[0]:
            return decoding_type
        return Annotated[(inner, *args[1:])]

    new_args = tuple(with_strict_dates(arg, _seen) for arg in args)
    if all(new is old for new, old in zip(new_args, args)):
        return decoding_type
    if origin is Union or origin is types.UnionType:
        return Union[new_args]
    try:
        return origin[new_args]
    except TypeError:
        return decoding_type


@lru_cache(maxsize=None)
def _adapters_for(decoding_type: Any) -> Tuple[TypeAdapter, Optional[TypeAdapter]]:
    strict_type = with_strict_dates(decoding_type)
    date_check = TypeAdapter(strict_type) if strict_type is not decoding_type else None
    return TypeAdapter(decoding_type), date_check


class CustomDateJSONDecoder:
    """
    Decodes JSON bytes into any pydantic-compatible type.

    Adapters are built once per target type and shared, so a single decoder
    instance is safe to use from concurrent requests.

    Example:
        ```python
        decoder = CustomDateJSONDecoder()
        countries = decoder.decode(list[CountryDTO], response.body)
        ```
    """

    def decode(self, decoding_type: Type[T], data: bytes) -> T:
        """
        Decode ``data`` into ``decoding_type``.

        Raises:
            pydantic.ValidationError: If the bytes are not valid JSON or do not
                match the target type (including malformed date strings)
        """
        adapter, date_check = _adapters_for(decoding_type)
        if date_check is not None:
            # Callers get their own model classes back, not the rewritten ones
            date_check.validate_json(data)
        return adapter.validate_json(data)


custom_date_json_decoder = CustomDateJSONDecoder()
