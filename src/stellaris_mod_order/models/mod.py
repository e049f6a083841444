from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ModSource(str, Enum):
    LOCAL = "local"
    STEAM = "steam"


class ModStatus(str, Enum):
    INVALID_MOD = "invalid_mod"
    READY_TO_PLAY = "ready_to_play"


@dataclass(frozen=True)
class Mod:
    """One entry of the launcher's mods_registry.json.

    Only ``id`` and ``display_name`` matter for ordering; the rest is carried
    through so the entry can be written back in the registry's own format.
    """

    id: str
    steam_id: str
    display_name: str
    time_updated: int
    source: ModSource
    dir_path: str
    status: ModStatus
    thumbnail_path: str
    tags: list[str] | None = None
    thumbnail_url: str | None = None
    game_registry_id: str | None = None
    required_version: str | None = None
    archive_path: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Mod:
        tags = data.get("tags")
        return cls(
            id=data["id"],
            steam_id=data["steamId"],
            display_name=data["displayName"],
            time_updated=data["timeUpdated"],
            source=ModSource(data["source"]),
            dir_path=data["dirPath"],
            status=ModStatus(data["status"]),
            thumbnail_path=data["thumbnailPath"],
            tags=list(tags) if tags is not None else None,
            thumbnail_url=data.get("thumbnailUrl"),
            game_registry_id=data.get("gameRegistryId"),
            required_version=data.get("requiredVersion"),
            archive_path=data.get("archivePath"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "steamId": self.steam_id,
            "displayName": self.display_name,
            "tags": list(self.tags) if self.tags is not None else None,
            "timeUpdated": self.time_updated,
            "source": self.source.value,
            "thumbnailUrl": self.thumbnail_url,
            "dirPath": self.dir_path,
            "status": self.status.value,
            "id": self.id,
            "gameRegistryId": self.game_registry_id,
            "thumbnailPath": self.thumbnail_path,
            "requiredVersion": self.required_version,
            "archivePath": self.archive_path,
        }


@dataclass
class GameData:
    mods_order: list[str] = field(default_factory=list)
    # Always written as true; acceptance state is not tracked.
    is_eula_accepted: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "modsOrder": list(self.mods_order),
            "isEulaAccepted": self.is_eula_accepted,
        }
