# identitystore/conf/models.py

from pydantic import BaseModel, ConfigDict, Field


class CookieOptions(BaseModel):
    """Keys of the durable id cookie and the legacy combined cookie."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    key: str = "ajs_user_id"
    old_key: str = Field(default="ajs_user", alias="oldKey")


class LocalStorageOptions(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    key: str = "ajs_user_traits"


class UserOptions(BaseModel):
    """
    Effective configuration of a :class:`~identitystore.user.User`.

    Field names follow Python conventions; the serialized (alias) form matches
    the keys used by the JavaScript tracking snippet, so ``localStorage`` and
    ``oldKey`` are accepted on input and produced by :meth:`as_dict`.

    Unknown keys are kept as extras so that integrations can stash their own
    settings next to ours.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    persist: bool = True
    cookie: CookieOptions = Field(default_factory=CookieOptions)
    local_storage: LocalStorageOptions = Field(
        default_factory=LocalStorageOptions, alias="localStorage"
    )

    def as_dict(self) -> dict[str, object]:
        """Return the options in their alias (wire) form."""
        return self.model_dump(by_alias=True)
