"""Settings Store CLI - inspect the active configuration.

Usage:
    settingsstore show                       # Print the bundled config.properties
    settingsstore get server.port --type int # Print one typed value
    settingsstore list --format yaml         # Print the whole active mapping
    settingsstore --config app.properties list
"""

import argparse
import json
import logging
import sys
from typing import Optional

import yaml

from .errors import ConfigIOError, FormatError, KeyNotFoundError, ResourceLoadError
from .properties import dumps_properties
from .store import Settings, get_settings

VALUE_TYPES = ("string", "int", "long", "boolean")
LIST_FORMATS = ("properties", "json", "yaml")


def _load_settings(args: argparse.Namespace) -> Settings:
    settings = get_settings()
    if args.config:
        settings.load_from(args.config)
    return settings


def cmd_show(args: argparse.Namespace) -> int:
    """Write the bundled default resource verbatim to stdout."""
    settings = get_settings()
    ok = settings.dump_default_resource(sys.stdout.buffer)
    return 0 if ok else 1


def cmd_get(args: argparse.Namespace) -> int:
    """Print a single value, coerced to the requested type."""
    settings = _load_settings(args)
    value_type = args.type or "string"

    try:
        if value_type == "int":
            value = settings.get_int(args.key, args.default)
        elif value_type == "long":
            value = settings.get_long(args.key, args.default)
        elif value_type == "boolean":
            value = settings.get_boolean(args.key)
        else:
            value = settings.get_string(args.key, args.default)
    except (FormatError, KeyNotFoundError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if value is None:
        print(f"❌ Key not found: {args.key}", file=sys.stderr)
        return 1

    if isinstance(value, bool):
        value = str(value).lower()
    print(value)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Print the active mapping, sorted by key."""
    settings = _load_settings(args)
    snapshot = settings.snapshot()
    output_format = args.format or "properties"

    if output_format == "json":
        print(json.dumps(snapshot, indent=2, sort_keys=True, ensure_ascii=False))
    elif output_format == "yaml":
        sys.stdout.write(
            yaml.safe_dump(snapshot, sort_keys=True, allow_unicode=True,
                           default_flow_style=False)
        )
    else:
        sys.stdout.write(dumps_properties(snapshot))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="settingsstore",
        description="Settings Store - inspect properties configuration",
    )
    parser.add_argument("--config", "-c", type=str, default=None,
                        help="Properties file merged over the bundled defaults")
    parser.add_argument("--log-level", type=str, default="warning",
                        choices=["debug", "info", "warning", "error"])
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show
    subparsers.add_parser("show", help="Print the bundled config.properties")

    # get
    get_parser = subparsers.add_parser("get", help="Print a single value")
    get_parser.add_argument("key", type=str)
    get_parser.add_argument("--default", "-d", type=str, default=None,
                            help="Value used when the key is absent (not allowed with --type boolean)")
    get_parser.add_argument("--type", "-t", type=str, default="string",
                            choices=VALUE_TYPES)

    # list
    list_parser = subparsers.add_parser("list", help="Print all active values")
    list_parser.add_argument("--format", "-f", type=str, default="properties",
                             choices=LIST_FORMATS)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "get" and args.type == "boolean" and args.default is not None:
        parser.error("--default cannot be used with --type boolean")

    # stdout is reserved for command output
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    commands = {
        "show": cmd_show,
        "get": cmd_get,
        "list": cmd_list,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(command(args))
    except (ResourceLoadError, ConfigIOError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
