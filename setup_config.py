#!/usr/bin/env python3
# Area: Shared
"""
BWAI Shotgun - Configuration Setup Script
=========================================

Interactive script to generate shotgun.json, game.json and .env files.

Usage:
    python setup_config.py
"""

import json
import sys
from pathlib import Path


def prompt(question: str, default: str = "", required: bool = True) -> str:
    """Prompt user for input with optional default value."""
    if default:
        display = f"{question} [{default}]: "
    else:
        display = f"{question}: "

    while True:
        value = input(display).strip()
        if not value and default:
            return default
        if value:
            return value
        if not required:
            return ""
        print("  This field is required. Please enter a value.")


def print_header():
    """Print welcome header."""
    print()
    print("=" * 60)
    print("  BWAI Shotgun - Configuration Setup")
    print("=" * 60)
    print()
    print("This script will help you create shotgun.json, game.json and .env.")
    print("Press Enter to accept default values shown in [brackets].")
    print()


def print_section(title: str):
    """Print section header."""
    print()
    print(f"--- {title} ---")
    print()


def get_shotgun_values() -> dict:
    """Interactively collect installation settings."""
    config = {}

    print_section("StarCraft Installation")
    print("StarCraft 1.16.1 with BWAPI installed is required.")
    print("Leave empty on Windows to use the path from the registry.")
    print()
    starcraft_path = prompt("StarCraft folder", required=False)
    if starcraft_path:
        config["starcraft_path"] = starcraft_path

    print_section("Java (only for .jar bots)")
    java_path = prompt("java executable", default="java.exe", required=False)
    if java_path and java_path != "java.exe":
        config["java_path"] = java_path

    print_section("Execution Wrapper")
    default_kind = "none" if sys.platform == "win32" else "wine"
    kind = prompt("Wrapper (none / wine / sandboxie)", default=default_kind)
    wrapper = {"kind": kind}
    if kind == "sandboxie":
        wrapper["executable"] = prompt(
            "Full path to Start.exe", default=r"C:\Program Files\Sandboxie-Plus\Start.exe"
        )
        wrapper["box_name"] = prompt("Sandbox name", default="bwai")
    config["wrapper"] = wrapper

    return config


def get_game_values() -> dict:
    """Interactively collect the first match."""
    print_section("Match")
    game = {}
    game["map"] = prompt("Map (relative to StarCraft)", default="maps/BroodWar/(2)Benzene.scx")
    names = prompt("Bot names, separated by spaces (folders in bots/)")
    game["bots"] = [{"name": name} for name in names.split()]
    human = prompt("Do you want to host the game yourself? (y/n)", default="n")
    game["human_host"] = human.lower().startswith("y")
    return game


def write_json(data: dict, path: Path) -> None:
    """Write a JSON config file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)
    print(f"  Created: {path}")


def write_env_file(base_path: Path, config: dict, path: Path) -> None:
    """Write .env file."""
    lines = [f"SHOTGUN_HOME={base_path}"]
    if config.get("starcraft_path"):
        lines.append(f"STARCRAFT_PATH={config['starcraft_path']}")
    if config.get("java_path"):
        lines.append(f"JAVA_PATH={config['java_path']}")
    lines.append("SHOTGUN_LOG_LEVEL=INFO")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    print(f"  Created: {path}")


def main():
    """Main entry point."""
    print_header()

    try:
        shotgun = get_shotgun_values()
        game = get_game_values()
    except KeyboardInterrupt:
        print("\n\nSetup cancelled.")
        return 1

    print_section("Generating Files")

    base_path = Path.cwd()
    write_json(shotgun, base_path / "shotgun.json")
    write_json(game, base_path / "game.json")
    write_env_file(base_path, shotgun, base_path / ".env")

    print()
    print("=" * 60)
    print("  Setup Complete!")
    print("=" * 60)
    print()
    print("Next steps:")
    print()
    print("  1. Put bwheadless.exe, injectory_x86.exe and WMode.dll into tools/")
    print()
    print("  2. Give every bot a folder bots/<name>/ with a bot.json, e.g.")
    print('     {"race": "Protoss"}')
    print("     and its binary plus BWAPI.dll in bots/<name>/bwapi-data/")
    print()
    print("  3. Start the match:")
    print("     bwai-shotgun")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
