"""Base model class for all anchorsnap models with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class SnapBaseModel(BaseModel):
    """Base model for anchorsnap models with built-in serialization.

    Models are frozen: schemas and decoded records are shared read-only
    across decode workers once built.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=False,
        frozen=True,
        populate_by_name=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
