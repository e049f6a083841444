from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from stellaris_mod_order.errors import ModOrderError
from stellaris_mod_order.models.mod import GameData
from stellaris_mod_order.services.game_data_service import GameDataService
from stellaris_mod_order.services.registry_service import RegistryService
from stellaris_mod_order.utils.constants import APP_NAME, DEFAULT_INSTALL_DIR
from stellaris_mod_order.utils.load_order import build_game_data
from stellaris_mod_order.utils.log import configure_logging, get_logger

try:
    __version__ = version(APP_NAME)
except PackageNotFoundError:
    __version__ = "0.0.0"

logger = get_logger(__name__)


@dataclass
class Config:
    install_dir: Path = field(default_factory=lambda: Path(DEFAULT_INSTALL_DIR))
    dry_run: bool = False


def run(
    config: Config,
    registry_service: RegistryService | None = None,
    game_data_service: GameDataService | None = None,
) -> GameData:
    """Read the registry, sort it and write game_data.json.

    With ``config.dry_run`` the result is printed instead of written.
    """
    registry_service = registry_service or RegistryService()
    game_data_service = game_data_service or GameDataService()

    mods = registry_service.load(config.install_dir)
    game_data = build_game_data(mods.values())
    logger.debug("Load order: %s", game_data.mods_order)

    if config.dry_run:
        print(game_data_service.render(game_data))
    else:
        game_data_service.save(config.install_dir, game_data)
    return game_data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Write a sorted Stellaris mod load order to game_data.json",
    )
    parser.add_argument(
        "-d",
        "--install-dir",
        type=Path,
        default=Path(DEFAULT_INSTALL_DIR),
        help="Stellaris install directory, default '.'",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated game data instead of writing it",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    config = Config(install_dir=args.install_dir, dry_run=args.dry_run)
    try:
        run(config)
    except ModOrderError as e:
        logger.debug("Run failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    if not config.dry_run:
        print("done!")
    sys.exit(0)


if __name__ == "__main__":
    main()
