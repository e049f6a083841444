from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from stellaris_mod_order.errors import ModOrderError
from stellaris_mod_order.models.mod import GameData
from stellaris_mod_order.utils.constants import GAME_DATA_FILE_NAME
from stellaris_mod_order.utils.log import get_logger

logger = get_logger(__name__)


class GameDataWriteError(ModOrderError):
    stage = "failed to write game data to file"


class GameDataService:
    """Writes the launcher's game_data.json.

    The file is always rewritten from scratch; nothing from a previous
    version is merged in.
    """

    def render(self, game_data: GameData) -> str:
        """Serialize to the compact form the launcher writes itself."""
        return json.dumps(game_data.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def save(self, install_dir: str | Path, game_data: GameData) -> Path:
        """Write ``<install_dir>/game_data.json``, replacing any existing file."""
        file_path = Path(install_dir) / GAME_DATA_FILE_NAME
        content = self.render(game_data)
        logger.info("Writing %d mods to %s", len(game_data.mods_order), file_path)

        # Atomic write: write to temp file then rename
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=file_path.parent, suffix=".tmp", prefix=".game_data_"
            )
        except OSError as e:
            raise GameDataWriteError(f"{file_path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, file_path)
        except BaseException as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            if isinstance(e, OSError):
                raise GameDataWriteError(f"{file_path}: {e}") from e
            raise
        return file_path
