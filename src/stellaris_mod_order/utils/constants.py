APP_NAME = "stellaris-mod-order"

REGISTRY_FILE_NAME = "mods_registry.json"
GAME_DATA_FILE_NAME = "game_data.json"

DEFAULT_INSTALL_DIR = "."
