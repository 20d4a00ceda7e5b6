"""Mapping between the wire and internal forms of a user."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from useradmin.schemas.user import Roles, UserFields, UserGQL, UserRecord

WireUser = Union[UserGQL, UserRecord, Mapping[str, Any]]


def transform_user_from_gql(user: WireUser) -> UserRecord:
    """Return the internal form of ``user``.

    Accepts a parsed ``UserGQL``, a raw wire mapping, or a ``UserRecord``
    (returned unchanged, so applying the transform twice is the same as once).
    An empty or missing image uri becomes ``None``; unknown role names are
    dropped.
    """
    if isinstance(user, UserRecord):
        return user
    if isinstance(user, Mapping):
        if isinstance(user.get("roles"), Mapping):
            record = UserRecord.model_validate(user)
            return record.model_copy(update={"image_uri": record.image_uri or None})
        user = UserGQL.model_validate(user)
    return UserRecord(
        id=user.id,
        name=user.name,
        email=user.email,
        image_uri=user.image_uri or None,
        roles=Roles.from_names(user.roles),
    )


def transform_user_to_gql(fields: UserFields, id: Optional[str] = None) -> dict[str, Any]:
    """Build the camelCase request body for a create (no id) or an edit."""
    body: dict[str, Any] = {
        "name": fields.name,
        "email": str(fields.email),
        "imageUri": fields.image_uri or "",
        "roles": fields.roles.names(),
    }
    if id is not None:
        body["id"] = id
    return body
