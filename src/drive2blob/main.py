# main.py
import argparse
import json
import logging
import sys

from .config import get_settings
from .exceptions import MigrationError
from .listing import list_destination, list_source
from .sessions import ProviderSessions
from .storage.dto import TransferRequest
from .transfer import transfer_file


def setup_logging():
    """Configures logging to console and, when LOG_FILE is set, to a file."""
    settings = get_settings()
    log_level_name = settings.LOG_LEVEL.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_name)

    # Clear any existing handlers to prevent duplicate logs on re-runs or implicit configs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if settings.LOG_FILE:
        try:
            file_handler = logging.FileHandler(settings.LOG_FILE)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except IOError as e:
            root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    # Reducing "noise" from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("azure").setLevel(logging.WARNING)


def _print_table(rows, columns):
    widths = [
        max([len(title)] + [len(str(row.get(key) or "")) for row in rows])
        for key, title in columns
    ]
    print("  ".join(title.ljust(width) for (_, title), width in zip(columns, widths)))
    for row in rows:
        print(
            "  ".join(
                str(row.get(key) or "").ljust(width)
                for (key, _), width in zip(columns, widths)
            )
        )


def cmd_serve(args) -> int:
    import uvicorn

    from .api import create_app

    settings = get_settings()
    app = create_app(ProviderSessions(settings))
    uvicorn.run(
        app,
        host=args.host or settings.HOST,
        port=args.port or settings.PORT,
        log_config=None,
    )
    return 0


def cmd_list_source(args) -> int:
    objects = list_source(ProviderSessions(get_settings()))
    rows = [
        {
            "id": obj.provider_object_id,
            "name": obj.name,
            "size": obj.human_size,
            "kind": obj.kind,
            "transferable": "yes" if obj.is_transferable else "no",
        }
        for obj in objects
    ]
    _print_table(
        rows,
        [("id", "ID"), ("name", "NAME"), ("size", "SIZE"), ("kind", "TYPE"), ("transferable", "TRANSFERABLE")],
    )
    return 0


def cmd_list_destination(args) -> int:
    objects = list_destination(ProviderSessions(get_settings()))
    rows = [
        {
            "name": obj.name,
            "size": obj.human_size,
            "created": obj.created_at.isoformat() if obj.created_at else "",
        }
        for obj in objects
    ]
    _print_table(rows, [("name", "NAME"), ("size", "SIZE"), ("created", "CREATED")])
    return 0


def cmd_transfer(args) -> int:
    outcome = transfer_file(
        ProviderSessions(get_settings()),
        TransferRequest(source_object_id=args.file_id, target_name=args.file_name),
    )
    print(json.dumps(outcome.model_dump(exclude_none=True)))
    return 0 if outcome.ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect Google Drive and Azure Blob Storage and migrate files between them."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", help="Bind address (default: HOST setting).")
    serve.add_argument("--port", type=int, help="Bind port (default: PORT setting).")
    serve.set_defaults(func=cmd_serve)

    subparsers.add_parser(
        "list-source", help="List the configured Google Drive folder."
    ).set_defaults(func=cmd_list_source)
    subparsers.add_parser(
        "list-destination", help="List the configured Azure Blob container."
    ).set_defaults(func=cmd_list_destination)

    transfer = subparsers.add_parser(
        "transfer", help="Copy one Google Drive file into the Azure container."
    )
    transfer.add_argument("file_id", help="Google Drive file ID.")
    transfer.add_argument("file_name", help="Blob name to write.")
    transfer.set_defaults(func=cmd_transfer)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        setup_logging()
        return args.func(args)
    except MigrationError as e:
        logging.critical(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
