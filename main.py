import argparse
import sys
from typing import List, Optional, Tuple
from farmstead.components.data_components import PlantType, CROP_NAMES
from farmstead.core.game import FarmGame
from farmstead.utils.logger import Logger

HELP_TEXT = """Commands:
  plant <crop> [row col]   plant potato/carrot/cabbage (default: tile under player)
  harvest [row col]        harvest (default: tile under player)
  move <dx> <dy>           move the player
  day                      advance to the next day
  undo | redo              step through history
  save <slot> | load <slot>
  show                     print the farm
  help | quit"""

_PLANT_SYMBOLS = {PlantType.NONE: ".", PlantType.POTATO: "P", PlantType.CARROT: "C", PlantType.CABBAGE: "B"}

def parse_command(line: str) -> Optional[Tuple[str, List]]:
    """
    Parse one command line into (name, args). Returns None for blank lines
    and comments; raises ValueError for anything malformed.
    """
    parts = line.split("#", 1)[0].split()
    if not parts:
        return None
    name, rest = parts[0].lower(), parts[1:]

    if name == "plant":
        if len(rest) not in (1, 3):
            raise ValueError("usage: plant <crop> [row col]")
        crop = rest[0].lower()
        if crop not in CROP_NAMES:
            raise ValueError(f"unknown crop {rest[0]!r}, expected one of {', '.join(CROP_NAMES)}")
        return name, [crop] + [int(v) for v in rest[1:]]
    if name == "harvest":
        if len(rest) not in (0, 2):
            raise ValueError("usage: harvest [row col]")
        return name, [int(v) for v in rest]
    if name == "move":
        if len(rest) != 2:
            raise ValueError("usage: move <dx> <dy>")
        return name, [int(v) for v in rest]
    if name in ("save", "load"):
        if len(rest) != 1:
            raise ValueError(f"usage: {name} <slot>")
        return name, [rest[0]]
    if name in ("day", "undo", "redo", "show", "help", "quit"):
        if rest:
            raise ValueError(f"{name} takes no arguments")
        return name, []
    raise ValueError(f"unknown command {parts[0]!r}")

def run_command(game: FarmGame, name: str, args: List) -> bool:
    if name == "plant":
        if len(args) == 3:
            return game.plant(args[1], args[2], args[0])
        return game.plant_here(args[0])
    if name == "harvest":
        if args:
            return game.harvest(args[0], args[1])
        return game.harvest_here()
    if name == "move":
        return game.move_player(args[0], args[1])
    if name == "day":
        return game.advance_day()
    if name == "undo":
        return game.undo()
    if name == "redo":
        return game.redo()
    if name == "save":
        return game.save_to_slot(args[0])
    if name == "load":
        return game.load_from_slot(args[0])
    if name == "show":
        print(render_farm(game))
        return True
    if name == "help":
        print(HELP_TEXT)
        return True
    raise ValueError(f"unhandled command {name!r}")

def render_farm(game: FarmGame) -> str:
    """Plain-text view: one cell per tile as <plant><level>, player marked with @."""
    lines = [f"Day {game.day_count} | actions left: {game.actions_remaining}",
             "Inventory: " + ", ".join(f"{k}={v}" for k, v in game.inventory.items())]
    if game.achievements:
        lines.append("Achievements: " + ", ".join(game.achievements))
    player = game.active_tile()
    for row in range(game.rows):
        cells = []
        for col in range(game.cols):
            tile = game.tile(row, col)
            mark = "@" if player == (row, col) else " "
            cells.append(f"{mark}{_PLANT_SYMBOLS[tile.plant_type]}{tile.plant_level or ' '}")
        lines.append("".join(cells))
    return "\n".join(lines)

def main(argv: Optional[List[str]] = None) -> int:
    # 0. Parse Arguments
    parser = argparse.ArgumentParser(description="Farmstead headless farming game")
    parser.add_argument("--config", default="config", help="Directory holding balance/plants/scene JSON")
    parser.add_argument("--save-dir", default="saves", help="Directory for autosave and save slots")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the weather random source")
    parser.add_argument("--script", default=None, help="Read commands from this file instead of stdin")
    parser.add_argument("--resume", action="store_true", help="Continue from the autosave if present")
    parser.add_argument("--watch", action="store_true", help="Reload balance.json when it changes")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args(argv)

    Logger.set_debug(args.debug)

    # 1. Initialization
    game = FarmGame.from_config_dir(args.config, save_dir=args.save_dir, seed=args.seed, watch=args.watch)
    if args.resume and game.has_autosave() and not game.load_autosave():
        print("error: could not resume from autosave, starting a new game")

    source = open(args.script, "r", encoding="utf-8") if args.script else sys.stdin
    try:
        # 2. Command loop
        for line in source:
            try:
                command = parse_command(line)
            except ValueError as e:
                print(f"error: {e}")
                continue
            if command is None:
                continue
            name, command_args = command
            if name == "quit":
                break
            try:
                ok = run_command(game, name, command_args)
            except IndexError as e:
                print(f"error: {e}")
                continue
            if name not in ("show", "help"):
                print("ok" if ok else "failed")
    finally:
        if source is not sys.stdin:
            source.close()
        game.shutdown()

    print(render_farm(game))
    return 0

if __name__ == "__main__":
    sys.exit(main())
