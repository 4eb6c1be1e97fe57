import argparse
import json
from typing import Any, Dict, Optional

from blueprint.clients.http_client import BlueprintAPIClient
from blueprint.execution.config_executor import ConfigExecutor
from blueprint.sessions.schema_list import IngestStatus, pending_suggestions, trigger_ingest
from blueprint.settings import Settings
from blueprint.utils.exceptions import BlueprintError


class C:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


def cprint(text: str, color: str = C.RESET, bold: bool = False):
    prefix = (C.BOLD if bold else "") + color
    print(f"{prefix}{text}{C.RESET}")


def _load_columns(path: Optional[str]):
    if not path:
        return []
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    config = {
        "event": args.event,
        "operation": args.command,
        "source": "api" if args.api else "local",
        "output_dir": args.output_dir,
        "submit": args.submit,
    }
    if args.command == "create":
        config["suggestion_file"] = args.suggestion
        config["dist_key"] = args.dist_key
        config["columns"] = _load_columns(args.columns)
    else:
        config["schema_file"] = args.schema
        config["version"] = args.version
        config["additions"] = _load_columns(args.additions)
    return config


def _add_common(sub: argparse.ArgumentParser):
    sub.add_argument("--event", required=True, help="Event / table name")
    sub.add_argument("--api", action="store_true", help="Read suggestion/schema from the schema service")
    sub.add_argument("--submit", action="store_true", help="Submit the migration to the schema service")
    sub.add_argument("--output-dir", default="artifacts")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Blueprint schema migration CLI")
    parser.add_argument("--config", help="Path to YAML run configuration")

    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser("create", help="Build an add-table migration")
    _add_common(create)
    create.add_argument("--suggestion", help="Suggestion JSON file")
    create.add_argument("--dist-key", default=None, help="Override the distribution key")
    create.add_argument("--columns", help="JSON file with extra columns")

    update = subparsers.add_parser("update", help="Build an update-table migration")
    _add_common(update)
    update.add_argument("--schema", help="Existing schema JSON file")
    update.add_argument("--version", type=int, default=None)
    update.add_argument("--additions", help="JSON file with columns to add")

    subparsers.add_parser("pending", help="List suggestions without a schema")

    ingest = subparsers.add_parser("ingest", help="Flush a table through the ingester")
    ingest.add_argument("--table", required=True)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.config and not args.command:
        parser.error("either --config or a command is required")

    settings = Settings.from_env()

    try:
        if args.command == "pending":
            with BlueprintAPIClient.from_settings(settings) as client:
                for s in pending_suggestions(client.list_schemas(), client.list_suggestions()):
                    print(s.event_name)
            return

        if args.command == "ingest":
            with BlueprintAPIClient.from_settings(settings) as client:
                status = trigger_ingest(client, args.table)
            color = C.GREEN if status == IngestStatus.FLUSHED else C.RED
            cprint(f"[INGEST] {args.table}: {status.value}", color, bold=True)
            if status == IngestStatus.FAILED:
                raise SystemExit(1)
            return

        if args.config:
            executor = ConfigExecutor(config_path=args.config, settings=settings)
        else:
            executor = ConfigExecutor(config=_build_config_from_args(args), settings=settings)

        cprint("\n[START] Migration build started", C.BLUE, bold=True)
        cprint(f"[INFO] Event={executor.event}  Operation={executor.operation}", C.DIM)

        result = executor.execute()

        for path in result["outputs"]:
            cprint(f"[OUTPUT] {path}", C.CYAN)
        cprint(f"[DONE] {result['message']}", C.GREEN, bold=True)

    except (BlueprintError, ValueError, FileNotFoundError) as e:
        cprint("\n[FAILED] Migration build failed.", C.RED, bold=True)
        cprint(str(e), C.RED)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
