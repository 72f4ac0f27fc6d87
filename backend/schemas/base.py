# backend/schemas/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Base configuration: ORM compatibility and camelCase names on the wire
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class DetailResponse(BaseModel):
    detail: str
