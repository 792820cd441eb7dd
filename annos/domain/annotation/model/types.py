"""Annotation types: field definitions and the values they accept.

Each type has a definition (attached to an AnnotationField) and a value shape
(attached to an Annotation). Both are discriminated on ``type``.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from annos.domain.shared.error import ValidationError
from annos.domain.shared.model.value import ValueObject
from annos.domain.shared.result import Err, Ok, Result


class _WireModel(ValueObject):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True)


class AnnotationType(StrEnum):
    DYAD = "dyad"
    TRIAD = "triad"
    RATING = "rating"
    SINGLE_SELECT = "singleSelect"
    MULTI_SELECT = "multiSelect"


# =============================================================================
# Field definitions
# =============================================================================


class DyadDefinition(_WireModel):
    type: Literal["dyad"] = "dyad"
    side_a: str = Field(alias="sideA")
    side_b: str = Field(alias="sideB")


class TriadDefinition(_WireModel):
    type: Literal["triad"] = "triad"
    vertex_a: str = Field(alias="vertexA")
    vertex_b: str = Field(alias="vertexB")
    vertex_c: str = Field(alias="vertexC")


class RatingDefinition(_WireModel):
    type: Literal["rating"] = "rating"
    number_of_stars: int = Field(default=5, ge=1, le=10, alias="numberOfStars")


class _OptionsDefinition(_WireModel):
    options: list[str] = Field(min_length=1)

    @field_validator("options")
    @classmethod
    def _unique(cls, v: list[str]) -> list[str]:
        if len(v) != len(set(v)):
            raise ValueError("options must be unique")
        return v


class SingleSelectDefinition(_OptionsDefinition):
    type: Literal["singleSelect"] = "singleSelect"


class MultiSelectDefinition(_OptionsDefinition):
    type: Literal["multiSelect"] = "multiSelect"


AnnotationFieldDefinition = Annotated[
    Union[
        DyadDefinition,
        TriadDefinition,
        RatingDefinition,
        SingleSelectDefinition,
        MultiSelectDefinition,
    ],
    Field(discriminator="type"),
]

_definition_adapter: TypeAdapter[AnnotationFieldDefinition] = TypeAdapter(AnnotationFieldDefinition)


def parse_definition(
    type: str, payload: dict[str, Any]
) -> Result[AnnotationFieldDefinition, ValidationError]:
    """Build a field definition from a type tag and its wire payload."""
    try:
        return Ok(_definition_adapter.validate_python({**payload, "type": type}))
    except PydanticValidationError as e:
        return Err(ValidationError(f"Invalid {type} definition: {_first_error(e)}", field="definition"))


# =============================================================================
# Values
# =============================================================================


class DyadValue(_WireModel):
    type: Literal["dyad"] = "dyad"
    value: float = Field(ge=0.0, le=1.0)


class TriadValue(_WireModel):
    type: Literal["triad"] = "triad"
    vertex_a: float = Field(ge=0.0, alias="vertexA")
    vertex_b: float = Field(ge=0.0, alias="vertexB")
    vertex_c: float = Field(ge=0.0, alias="vertexC")

    @model_validator(mode="after")
    def _sums_to_one(self) -> TriadValue:
        total = self.vertex_a + self.vertex_b + self.vertex_c
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"triad weights must sum to 1, got {total}")
        return self


class RatingValue(_WireModel):
    type: Literal["rating"] = "rating"
    rating: int = Field(ge=1)


class SingleSelectValue(_WireModel):
    type: Literal["singleSelect"] = "singleSelect"
    option: str


class MultiSelectValue(_WireModel):
    type: Literal["multiSelect"] = "multiSelect"
    options: list[str] = Field(min_length=1)

    @field_validator("options")
    @classmethod
    def _unique(cls, v: list[str]) -> list[str]:
        if len(v) != len(set(v)):
            raise ValueError("selected options must be unique")
        return v


AnnotationValue = Annotated[
    Union[
        DyadValue,
        TriadValue,
        RatingValue,
        SingleSelectValue,
        MultiSelectValue,
    ],
    Field(discriminator="type"),
]

_value_adapter: TypeAdapter[AnnotationValue] = TypeAdapter(AnnotationValue)


def value_matches_definition(value: AnnotationValue, definition: AnnotationFieldDefinition) -> bool:
    """True if ``value`` has the definition's type tag."""
    return value.type == definition.type


def check_value_against_definition(
    value: AnnotationValue, definition: AnnotationFieldDefinition
) -> str | None:
    """Return a reason the value is out of the definition's range, or None."""
    if isinstance(value, RatingValue) and isinstance(definition, RatingDefinition):
        if value.rating > definition.number_of_stars:
            return f"rating {value.rating} exceeds {definition.number_of_stars} stars"
    elif isinstance(value, SingleSelectValue) and isinstance(definition, SingleSelectDefinition):
        if value.option not in definition.options:
            return f"option {value.option!r} is not one of {definition.options}"
    elif isinstance(value, MultiSelectValue) and isinstance(definition, MultiSelectDefinition):
        unknown = [o for o in value.options if o not in definition.options]
        if unknown:
            return f"options {unknown} are not among {definition.options}"
    return None


def create_annotation_value(
    definition: AnnotationFieldDefinition, payload: dict[str, Any]
) -> Result[AnnotationValue, ValidationError]:
    """Build a value of the definition's type from a raw payload.

    The payload's own ``type`` key, if any, is ignored; the definition decides.
    """
    try:
        value = _value_adapter.validate_python({**payload, "type": definition.type})
    except PydanticValidationError as e:
        return Err(ValidationError(f"Invalid annotation value: {_first_error(e)}", field="value"))

    reason = check_value_against_definition(value, definition)
    if reason is not None:
        return Err(ValidationError(f"Invalid annotation value: {reason}", field="value"))
    return Ok(value)


def parse_value(payload: dict[str, Any]) -> AnnotationValue:
    """Rehydrate a stored value. Raises pydantic's ValidationError on bad data."""
    return _value_adapter.validate_python(payload)


def _first_error(e: PydanticValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(p) for p in err["loc"])
    return f"{loc}: {err['msg']}" if loc else err["msg"]
