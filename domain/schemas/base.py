from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON keys.

    Requests accept either spelling; responses are serialized with the
    camelCase aliases (FastAPI serializes ``response_model`` by alias).
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )
