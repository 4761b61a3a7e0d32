"""Entity: Book."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class BookRecord(BaseModel):
    """A validated book: numeric identifier plus name.

    Records are built transiently from request input and never persisted, so
    the model is frozen and compares by value.
    """

    model_config = ConfigDict(frozen=True)

    id: StrictInt = Field(description="Numeric book identifier")
    name: StrictStr = Field(description="Name")


class ConstraintViolation(BaseModel):
    """A single field-level rule failure."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Offending field")
    constraint: str = Field(description="Identifier of the unmet rule")
    message: str = Field(description="Human readable explanation")
