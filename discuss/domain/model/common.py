"""Shared base for discussion entities and segments."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen pydantic model.

    Comment forests and segment trees are shared between the state held by
    services and the snapshots handed to renderers, so nothing may mutate a
    node in place. Changes are made with `model_copy(update=...)`.
    """

    model_config = ConfigDict(frozen=True)
