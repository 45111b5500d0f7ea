#!/usr/bin/env python3
"""Command line tool for exercising the bundled template plugin."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Ensure project root is in path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

load_dotenv('.env')

from pluginapi.constants import DEFAULT_MAX_RESULTS, METADATA_LOOKUP_TIMEOUT, TEMPLATE_PLUGIN_DIR
from pluginapi.plugins.config import PluginConfigError
from pluginapi.plugins.manifest import PluginManifest, load_manifest
from pluginapi.plugins.metadata import GameMetadataProvider
from pluginapi.plugins.resolver import MetadataResolver
from plugins.bundled.template.plugin import PluginTemplate

console = Console()


def parse_config_pairs(pairs: List[str]) -> Dict[str, Optional[str]]:
    """Turn KEY=VALUE arguments into a config mapping."""
    config = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got '{pair}'")
        config[key] = value
    return config


def get_manifest() -> PluginManifest:
    manifest = load_manifest(TEMPLATE_PLUGIN_DIR)
    if manifest is None:
        console.print(f"[red]No valid plugin.json at {TEMPLATE_PLUGIN_DIR}[/red]")
        sys.exit(1)
    return manifest


def get_plugin(config_pairs: Optional[List[str]] = None) -> PluginTemplate:
    """Create the template plugin, loading configuration if any was given."""
    plugin = PluginTemplate(get_manifest().id)
    if config_pairs:
        try:
            plugin.load_config(parse_config_pairs(config_pairs))
        except PluginConfigError as e:
            print_errors(e.errors)
            sys.exit(1)
    return plugin


def print_errors(errors: Dict[str, str]) -> None:
    table = Table(title="Configuration errors", border_style="red")
    table.add_column("Key")
    table.add_column("Error")
    for key, message in errors.items():
        table.add_row(key, message)
    console.print(table)


def cmd_info(args):
    """Show the plugin manifest."""
    manifest = get_manifest()
    console.print(Panel(
        json.dumps(manifest.model_dump(), indent=2, ensure_ascii=False),
        title=f"{manifest.name} {manifest.version}",
        border_style="blue",
    ))


def cmd_schema(args):
    """Show the configuration schema."""
    plugin = get_plugin()
    table = Table(title="Configuration schema")
    for column in ("Key", "Type", "Required", "Secret", "Default", "Label"):
        table.add_column(column)
    for element in plugin.config_metadata:
        value_type = element.value_type
        if element.options:
            value_type = f"enum ({', '.join(element.options)})"
        table.add_row(
            element.key,
            value_type,
            "yes" if element.is_required else "no",
            "yes" if element.is_secret else "no",
            element.default_string or "",
            element.label,
        )
    console.print(table)


def cmd_validate(args):
    """Validate KEY=VALUE pairs against the plugin's rules."""
    plugin = get_plugin()
    result = plugin.validate_config(parse_config_pairs(args.pairs))
    if result.is_valid():
        console.print("[green]Configuration is valid[/green]")
        return
    print_errors(result.errors)
    sys.exit(1)


def get_provider(args) -> GameMetadataProvider:
    plugin = get_plugin(args.config)
    return plugin.get_extensions(GameMetadataProvider)[0]


def print_records(records) -> None:
    if not records:
        console.print("[yellow]No matches[/yellow]")
        return
    for index, record in enumerate(records, 1):
        console.print(Panel(
            json.dumps(record.to_dict(), indent=2, ensure_ascii=False),
            title=f"#{index} {record.title}",
        ))


def cmd_search(args):
    """Search by title."""
    resolver = MetadataResolver(timeout=METADATA_LOOKUP_TIMEOUT)
    records = asyncio.run(resolver.fetch_by_title(get_provider(args), args.title, args.max_results))
    print_records(records)


def cmd_lookup(args):
    """Look up a game by id."""
    resolver = MetadataResolver(timeout=METADATA_LOOKUP_TIMEOUT)
    record = asyncio.run(resolver.fetch_by_id(get_provider(args), args.game_id))
    print_records([record] if record else [])


def main():
    parser = argparse.ArgumentParser(description="Game Metadata Plugin Tool")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info
    subparsers.add_parser("info", help="Show plugin manifest")

    # schema
    subparsers.add_parser("schema", help="Show configuration schema")

    # validate
    validate_parser = subparsers.add_parser("validate", help="Validate configuration values")
    validate_parser.add_argument("pairs", nargs="*", metavar="KEY=VALUE", help="Configuration values")

    # search
    search_parser = subparsers.add_parser("search", help="Fetch metadata by title")
    search_parser.add_argument("title", help="Game title")
    search_parser.add_argument("--max-results", type=int, default=DEFAULT_MAX_RESULTS, help="Maximum results")
    search_parser.add_argument("--config", nargs="*", metavar="KEY=VALUE", help="Configuration to load first")

    # lookup
    lookup_parser = subparsers.add_parser("lookup", help="Fetch metadata by id")
    lookup_parser.add_argument("game_id", help="Game id in the plugin's data source")
    lookup_parser.add_argument("--config", nargs="*", metavar="KEY=VALUE", help="Configuration to load first")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if getattr(args, "max_results", 0) < 0:
        parser.error("--max-results must not be negative")

    commands = {
        "info": cmd_info,
        "schema": cmd_schema,
        "validate": cmd_validate,
        "search": cmd_search,
        "lookup": cmd_lookup,
    }

    try:
        commands[args.command](args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
