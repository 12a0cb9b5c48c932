"""Shared pydantic base model."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialised with camelCase keys (``phoneNumber``).

    Input is accepted under either the camelCase alias or the Python
    field name.  Unknown keys, including a body‑supplied ``id``, are
    ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
