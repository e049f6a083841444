from __future__ import annotations

import json
from pathlib import Path

from jsonschema import Draft202012Validator, validators
from jsonschema.exceptions import ValidationError

from stellaris_mod_order.errors import ModOrderError
from stellaris_mod_order.models.mod import Mod, ModSource, ModStatus
from stellaris_mod_order.utils.constants import REGISTRY_FILE_NAME
from stellaris_mod_order.utils.log import get_logger

logger = get_logger(__name__)


class RegistryError(ModOrderError):
    stage = "failed to read mod registry"


class RegistryNotFoundError(RegistryError):
    pass


class RegistryReadError(RegistryError):
    pass


class RegistryFormatError(RegistryError):
    stage = "failed to parse mod registry file"


_OPTIONAL_STRING = {"type": ["string", "null"]}

MOD_SCHEMA = {
    "type": "object",
    "required": [
        "steamId",
        "displayName",
        "timeUpdated",
        "source",
        "dirPath",
        "status",
        "id",
        "thumbnailPath",
    ],
    "properties": {
        "steamId": {"type": "string"},
        "displayName": {"type": "string"},
        "tags": {
            "type": ["array", "null"],
            "items": {"type": "string"},
        },
        "timeUpdated": {
            "type": "integer",
            "minimum": -(2**63),
            "maximum": 2**63 - 1,
        },
        "source": {"enum": [s.value for s in ModSource]},
        "thumbnailUrl": _OPTIONAL_STRING,
        "dirPath": {"type": "string"},
        "status": {"enum": [s.value for s in ModStatus]},
        "id": {"type": "string"},
        "gameRegistryId": _OPTIONAL_STRING,
        "thumbnailPath": {"type": "string"},
        "requiredVersion": _OPTIONAL_STRING,
        "archivePath": _OPTIONAL_STRING,
    },
}

REGISTRY_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": MOD_SCHEMA,
}

# JSON Schema counts 1.0 as an integer; timestamps must be real ints.
_RegistryValidator = validators.extend(
    Draft202012Validator,
    type_checker=Draft202012Validator.TYPE_CHECKER.redefine(
        "integer", lambda _, v: isinstance(v, int) and not isinstance(v, bool)
    ),
)

_VALIDATOR = _RegistryValidator(REGISTRY_SCHEMA)


class RegistryService:
    """Reads the launcher's mods_registry.json.

    The registry is a JSON object keyed by mod id, each value describing one
    installed mod. Unknown keys inside an entry are ignored; missing required
    keys, wrong types and unknown ``source``/``status`` values are errors.
    """

    def load(self, install_dir: str | Path) -> dict[str, Mod]:
        """Read and parse ``<install_dir>/mods_registry.json``."""
        path = Path(install_dir) / REGISTRY_FILE_NAME
        logger.info("Reading mod registry from %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise RegistryNotFoundError(f"{path} does not exist") from e
        except (OSError, UnicodeDecodeError) as e:
            raise RegistryReadError(f"{path}: {e}") from e
        return self.parse(text)

    def parse(self, text: str) -> dict[str, Mod]:
        """Parse registry JSON text into a mapping of registry key -> Mod."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RegistryFormatError(f"invalid JSON: {e}") from e

        # json.loads lets lone surrogate escapes such as "\ud800" through.
        try:
            json.dumps(data, ensure_ascii=False).encode("utf-8")
        except UnicodeEncodeError as e:
            raise RegistryFormatError(f"invalid unicode escape: {e}") from e

        try:
            _VALIDATOR.validate(data)
        except ValidationError as e:
            raise RegistryFormatError(f"{e.message} at {list(e.path)}") from e

        mods: dict[str, Mod] = {}
        for key, entry in data.items():
            mod = Mod.from_dict(entry)
            if mod.id != key:
                # The inner id is what the launcher expects in modsOrder.
                logger.warning(
                    "Registry key %r does not match mod id %r; using the mod id",
                    key,
                    mod.id,
                )
            mods[key] = mod

        logger.info("Loaded %d mods from registry", len(mods))
        return mods
