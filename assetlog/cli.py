"""Command-line interface for the inventory store."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from assetlog.codecs.json_codec import dumps_items, view_json
from assetlog.config import get_settings
from assetlog.db.database import open_store
from assetlog.db.errors import InventoryError, ItemNotFoundError
from assetlog.models.item import Item, SystemClock
from assetlog.seed import load_seed_items
from assetlog.services.inventory_service import InventoryService

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        filename=log_file,
    )


# -- output ------------------------------------------------------------------


def _print_items(items: Sequence[Item]) -> None:
    for item in items:
        print(f"  {item.id:>6} | {item.description[:32]:<32} | "
              f"{item.location[:16]:<16} | {item.status[:14]}")


def _print_item(item: Item) -> None:
    print(f"ID:          {item.id}")
    print(f"Description: {item.description}")
    print(f"Location:    {item.location}")
    print(f"Status:      {item.status}")
    print("Remarks:")
    for line in item.remark_entries():
        print(f"  {line}")


# -- commands ----------------------------------------------------------------


def cmd_init(svc: InventoryService, args: argparse.Namespace) -> int:
    print(f"Database initialized at: {svc.db.path}")
    if args.seed:
        count = svc.import_items(load_seed_items(args.seed))
        print(f"Seeded {count} items from {args.seed}")
    return 0


def cmd_add(svc: InventoryService, args: argparse.Namespace) -> int:
    item_id = svc.add_item(Item(
        description=args.description, location=args.location,
        status=args.status, remarks=args.remarks,
    ))
    print(f"Added item {item_id}")
    return 0


def cmd_append(svc: InventoryService, args: argparse.Namespace) -> int:
    svc.append_item(Item(
        id=args.id, description=args.description, location=args.location,
        status=args.status, remarks=args.remarks,
    ))
    print(f"Stored item {args.id}")
    return 0


def cmd_edit(svc: InventoryService, args: argparse.Namespace) -> int:
    try:
        current = svc.get_item_by_id(args.id)
    except ItemNotFoundError:
        print(f"No item {args.id}; nothing changed")
        return 0
    svc.edit_item(current.copy(
        description=args.description if args.description is not None else current.description,
        location=args.location if args.location is not None else current.location,
        status=args.status if args.status is not None else current.status,
        remarks=args.remarks,
    ))
    print(f"Edited item {args.id}")
    return 0


def cmd_log(svc: InventoryService, args: argparse.Namespace) -> int:
    svc.append_remarks_entry(args.id, args.message)
    print(f"Logged remark on item {args.id}")
    return 0


def cmd_delete(svc: InventoryService, args: argparse.Namespace) -> int:
    if svc.delete_item(args.id):
        print(f"Deleted item {args.id}")
    else:
        print(f"No item {args.id}; nothing deleted")
    return 0


def cmd_show(svc: InventoryService, args: argparse.Namespace) -> int:
    item = svc.get_item_by_id(args.id)
    if args.json:
        print(item.to_json())
    else:
        _print_item(item)
    return 0


def cmd_list(svc: InventoryService, args: argparse.Namespace) -> int:
    if args.limit is not None:
        items = svc.list_items_paged(args.after, args.limit)
    else:
        items = [i for i in svc.list_all() if i.id > args.after]
    if args.json:
        print(dumps_items(items))
        return 0
    print(f"Total: {len(items)}")
    _print_items(items)
    return 0


def cmd_find(svc: InventoryService, args: argparse.Namespace) -> int:
    clauses: list[str] = []
    params: list[str] = []
    if args.status:
        clauses.append("status = ?")
        params.append(args.status)
    if args.location:
        clauses.append("location = ?")
        params.append(args.location)
    if args.text:
        clauses.append("(description LIKE ? OR remarks LIKE ?)")
        params.extend([f"%{args.text}%"] * 2)

    count = 0
    with svc.iterate(" AND ".join(clauses), *params) as it:
        for item in it:
            _print_items([item])
            count += 1
    print(f"Matched: {count}")
    return 0


def cmd_reset_sequence(svc: InventoryService, args: argparse.Namespace) -> int:
    svc.reset_sequence()
    print(f"Sequence reset to {svc.db.index_start}")
    return 0


def cmd_export_csv(svc: InventoryService, args: argparse.Namespace) -> int:
    count = svc.export_csv(args.file)
    print(f"Exported {count} rows to {args.file}")
    return 0


def cmd_import_csv(svc: InventoryService, args: argparse.Namespace) -> int:
    count = svc.import_csv(args.file)
    print(f"Imported {count} records from {args.file}")
    return 0


def cmd_export_json(svc: InventoryService, args: argparse.Namespace) -> int:
    if args.file:
        count = svc.export_json(args.file)
        print(f"Exported {count} items to {args.file}")
    else:
        print(svc.export_json_string())
    return 0


def cmd_import_json(svc: InventoryService, args: argparse.Namespace) -> int:
    count = svc.import_json(args.file)
    print(f"Imported {count} items from {args.file}")
    return 0


def cmd_view_json(svc: InventoryService, args: argparse.Namespace) -> int:
    print(view_json(args.file))
    return 0


# -- parser ------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="assetlog", description="Inventory record keeping")
    parser.add_argument("--db", type=str, help="Override database path (':memory:' allowed)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init", help="Create the database")
    p.add_argument("--seed", type=str, help="YAML file with items to import")
    p.set_defaults(handler=cmd_init)

    def item_fields(p: argparse.ArgumentParser, keep_unset: bool = False) -> None:
        # edit leaves a field alone when its flag is omitted
        default = None if keep_unset else ""
        p.add_argument("-d", "--description", default=default)
        p.add_argument("-l", "--location", default=default)
        p.add_argument("-s", "--status", default=default)
        p.add_argument("-r", "--remarks", default="")

    p = sub.add_parser("add", help="Add an item with a new id")
    item_fields(p)
    p.set_defaults(handler=cmd_add)

    p = sub.add_parser("append", help="Insert or replace an item by id")
    p.add_argument("id", type=int)
    item_fields(p)
    p.set_defaults(handler=cmd_append)

    p = sub.add_parser("edit", help="Update fields and append a remark")
    p.add_argument("id", type=int)
    item_fields(p, keep_unset=True)
    p.set_defaults(handler=cmd_edit)

    p = sub.add_parser("log", help="Append a timestamped remark")
    p.add_argument("id", type=int)
    p.add_argument("message")
    p.set_defaults(handler=cmd_log)

    p = sub.add_parser("delete", help="Delete an item")
    p.add_argument("id", type=int)
    p.set_defaults(handler=cmd_delete)

    p = sub.add_parser("show", help="Show one item")
    p.add_argument("id", type=int)
    p.add_argument("--json", action="store_true")
    p.set_defaults(handler=cmd_show)

    p = sub.add_parser("list", help="List items")
    p.add_argument("--after", type=int, default=0, help="Only ids greater than this")
    p.add_argument("--limit", type=int, help="Page size")
    p.add_argument("--json", action="store_true")
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("find", help="Stream items matching filters")
    p.add_argument("--status")
    p.add_argument("--location")
    p.add_argument("--text", help="Substring of description or remarks")
    p.set_defaults(handler=cmd_find)

    p = sub.add_parser("reset-sequence", help="Reset the id counter to its floor")
    p.set_defaults(handler=cmd_reset_sequence)

    for name, handler, needs_file in (
        ("export-csv", cmd_export_csv, True),
        ("import-csv", cmd_import_csv, True),
        ("export-json", cmd_export_json, False),
        ("import-json", cmd_import_json, True),
        ("view-json", cmd_view_json, True),
    ):
        p = sub.add_parser(name)
        if needs_file:
            p.add_argument("file")
        else:
            p.add_argument("file", nargs="?")
        p.set_defaults(handler=handler)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(
        "INFO" if args.verbose else settings.log_level,
        str(settings.log_file) if settings.log_file else None,
    )

    db = open_store(args.db or settings.database_path, index_start=settings.index_start)
    svc = InventoryService(db, SystemClock(settings.utc_offset_minutes))
    logger.debug(f"Running {args.command} against {db.path}")
    try:
        return args.handler(svc, args)
    except InventoryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        svc.close()


if __name__ == "__main__":
    sys.exit(main())
