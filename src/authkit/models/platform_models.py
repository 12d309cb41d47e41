"""
Pydantic models for the IntegrationOS platform payloads.

Covers every JSON shape exchanged while issuing an embed token:
- Settings returned by the settings endpoint
- Event links, connection definitions and generated session ids
- The embed token request body

Remote objects keep unknown fields (``extra="allow"``) so they can be
forwarded upstream unchanged.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class RemoteModel(BaseModel):
    """Base for objects received from the platform."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the platform's field names, omitting fields the remote did not send."""
        return self.model_dump(by_alias=True, exclude_unset=True)


def _object_entries(v: Any) -> Any:
    """Keep only the object entries of a remote list; ``null`` reads as empty."""
    if v is None:
        return []
    if isinstance(v, list):
        return [item for item in v if isinstance(item, dict)]
    return v


def _scalar_or_none(v: Any) -> Any:
    if isinstance(v, bool) or not isinstance(v, str | int):
        return None
    return v


def _bool_or_none(v: Any) -> Any:
    return v if isinstance(v, bool) else None


# Malformed values read as absent; only string and integer ids can match
RecordId = Annotated[str | int | None, BeforeValidator(_scalar_or_none)]
Flag = Annotated[bool | None, BeforeValidator(_bool_or_none)]


class ConnectedPlatform(RemoteModel):
    """Tenant-specific activation of a connection definition.

    A platform with a malformed flag or id is kept out of the filtered list
    instead of failing the whole settings response.
    """

    connection_definition_id: RecordId = Field(default=None, alias="connectionDefinitionId")
    active: Flag = None
    environment: Any = None


class PlatformSettings(RemoteModel):
    """Account settings returned by the settings endpoint."""

    connected_platforms: Annotated[list[ConnectedPlatform], BeforeValidator(_object_entries)] = Field(
        default_factory=list, alias="connectedPlatforms"
    )
    # Opaque to the SDK, forwarded as-is into the embed token
    features: Any = None


class EventLink(RemoteModel):
    """Event link registered for the embed session."""

    token: str
    group: str
    label: str


class ConnectionDefinition(RemoteModel):
    """Descriptor of an integrable third-party platform."""

    id: RecordId = Field(default=None, alias="_id")
    active: Flag = None


class ConnectionDefinitionPage(RemoteModel):
    """One page of the public connection definitions listing."""

    rows: Annotated[list[ConnectionDefinition], BeforeValidator(_object_entries)] = Field(default_factory=list)

    def active_ids(self) -> set[str | int]:
        """Ids of the definitions currently marked active; rows without an id are skipped."""
        return {row.id for row in self.rows if row.active is True and row.id is not None}


class SessionId(RemoteModel):
    """Identifier minted by the id generator endpoint."""

    id: str


class LinkSettings(BaseModel):
    connected_platforms: list[dict[str, Any]] = Field(serialization_alias="connectedPlatforms")
    event_inc_token: str = Field(serialization_alias="eventIncToken")


class EmbedTokenPayload(BaseModel):
    """Body sent to the embed token endpoint."""

    link_settings: LinkSettings = Field(serialization_alias="linkSettings")
    group: str
    label: str
    environment: str
    expires_at: int = Field(serialization_alias="expiresAt")
    session_id: str = Field(serialization_alias="sessionId")
    features: Any = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


__all__ = [
    "ConnectedPlatform",
    "ConnectionDefinition",
    "ConnectionDefinitionPage",
    "EmbedTokenPayload",
    "EventLink",
    "LinkSettings",
    "PlatformSettings",
    "RemoteModel",
    "SessionId",
]
