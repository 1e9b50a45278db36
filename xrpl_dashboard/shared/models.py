"""
Shared Models

Base class for read-only views over ingestion-pipeline documents.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class DocumentView(BaseModel):
    """
    Base view for a raw MongoDB document.

    Every field is optional and unknown fields are kept, since the ingestion
    pipeline does not enforce a schema. Views never fail on missing data;
    use ``from_document`` to build one from whatever the driver returned.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        extra="allow",
    )

    object_id: Optional[Any] = Field(default=None, alias="_id")

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]):
        """
        Build a view, dropping fields whose type does not fit.

        A field with an unexpected type is treated as absent rather than
        failing the whole document.
        """
        data = dict(document or {})
        try:
            return cls.model_validate(data)
        except ValueError as e:
            bad_fields = {
                str(error["loc"][0])
                for error in getattr(e, "errors", lambda: [])()
                if error.get("loc")
            }
            for name in bad_fields:
                field = cls.model_fields.get(name)
                data.pop(field.alias if field and field.alias else name, None)
                data.pop(name, None)
            return cls.model_validate(data)
