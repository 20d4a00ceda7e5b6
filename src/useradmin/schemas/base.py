from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class WireModel(BaseModel):
    """Base schema for payloads exchanged with the remote user API.

    Fields are declared in snake_case and travel as camelCase
    (``imageUri``, ``createdUser``). Both spellings are accepted on input so
    the same models parse server responses and build request bodies.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
