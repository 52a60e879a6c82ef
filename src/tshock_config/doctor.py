from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .errors import ConfigError
from .loader import DEFAULT_CONFIG_PATH, load_config
from .logging_utils import setup_logging
from .printer import format_diagnostics
from .schema import Configuration
from .utils import deep_merge, parse_override
from .writer import dump_config, save_config, upgrade_file


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tshock-config",
        description="Inspect, validate and initialise TShock configuration files.",
    )
    parser.add_argument(
        "command",
        choices=["validate", "print-schema", "init", "upgrade"],
        nargs="?",
        default="validate",
    )
    parser.add_argument("--path", default=str(DEFAULT_CONFIG_PATH), help="Base configuration file.")
    parser.add_argument("--profile", default=None, help="Profile layer merged over the base file (validate only).")
    parser.add_argument("--strict", action="store_true", help="Fail on unknown or retired keys.")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="GROUP.KEY=VALUE",
        help="Inline override applied after every file layer (validate only). Repeatable.",
    )
    parser.add_argument("--schema-path", default="tshock/config.schema.json", help="Where to write the JSON schema.")
    parser.add_argument("--show-config", action="store_true", help="Print the effective configuration.")
    parser.add_argument("--force", action="store_true", help="Let init overwrite an existing file.")
    parser.add_argument("--log-level", default="WARNING", help="Console log level.")
    args = parser.parse_args(argv)
    if args.command != "validate" and (args.profile or args.overrides):
        parser.error(f"--profile and --set do not apply to {args.command}")
    return args


def _collect_overrides(expressions: List[str]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for expression in expressions:
        merged = deep_merge(merged, parse_override(expression))
    return merged


def run_validate(path: str, profile: str | None, strict: bool, overrides: List[str], show_config: bool) -> None:
    try:
        loaded = load_config(
            path,
            profile=profile,
            inline_overrides=_collect_overrides(overrides),
            strict=True if strict else None,
        )
    except ValueError as exc:
        print(f"Configuration validation failed: {exc}")
        raise SystemExit(1) from exc

    print("Loaded configuration layers:")
    if not loaded.layers:
        print("  (none, using defaults)")
    for layer in loaded.layers:
        print(f"  - {layer}")
    print(format_diagnostics(loaded.diagnostics))
    if show_config:
        print(json.dumps(dump_config(loaded.config), indent=2, ensure_ascii=False))


def run_print_schema(schema_path: str) -> None:
    schema = Configuration.model_json_schema(by_alias=True)
    output = Path(schema_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(schema, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    print(f"Schema written to {output}")


def run_init(path: str, force: bool) -> None:
    target = Path(path)
    if target.exists() and not force:
        print(f"{target} already exists; use --force to overwrite or 'upgrade' to add new keys.")
        raise SystemExit(1)
    save_config(Configuration(), target)
    print(f"Default configuration written to {target}")


def run_upgrade(path: str, strict: bool) -> None:
    try:
        loaded = upgrade_file(path, strict=True if strict else None)
    except ConfigError as exc:
        print(f"Configuration upgrade failed: {exc}")
        raise SystemExit(1) from exc
    print(f"Configuration at {path} now lists every setting.")
    print(format_diagnostics(loaded.diagnostics))


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(log_level=args.log_level)
    if args.command == "validate":
        run_validate(args.path, args.profile, args.strict, args.overrides, args.show_config)
    elif args.command == "print-schema":
        run_print_schema(args.schema_path)
    elif args.command == "init":
        run_init(args.path, args.force)
    else:
        run_upgrade(args.path, args.strict)


if __name__ == "__main__":
    main()
