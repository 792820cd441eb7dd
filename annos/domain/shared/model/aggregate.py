from pydantic import BaseModel, ConfigDict


class Aggregate(BaseModel):
    """Mutable domain record. Transitions are methods on the subclass."""

    model_config = ConfigDict(validate_assignment=True, arbitrary_types_allowed=True)
