from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# JSON bodies use camelCase keys, Python code uses snake_case attributes
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )
