# foodorder/schemas/common.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Response base that serializes snake_case fields as camelCase
    (total_amount -> totalAmount), the shape the frontend reads.

    Fields are still populated by their Python names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement: {"success": true, "message": "..."}."""

    success: bool = True
    message: str
