from __future__ import annotations

import argparse
import logging
from pathlib import Path

from core.config import PathwaysConfig
from core.logging import setup_logging
from core.paths import ensure_runtime_directories
from core.pathways.manager import PathwaysManager
from core.pathways.models import SaveFileInfo
from core.pathways.pathway import Pathway
from i18n.i18n import initialize_i18n, tr

_NAME_WIDTH = 30


def _shorten(name: str, width: int = _NAME_WIDTH) -> str:
    if len(name) <= width:
        return name
    return "..." + name[-(width - 3):]


def _recent_name(pathway: Pathway) -> str:
    recent = pathway.recent_file
    return _shorten(recent.name) if recent is not None else tr("common.none")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathways", description=tr("cli.description"))
    parser.add_argument("--config", dest="config_path", type=Path, default=None, help=tr("cli.help.config"))
    parser.add_argument("--language", choices=["en", "de"], default=None, help=tr("cli.help.language"))
    parser.add_argument("--debug", action="store_true", help=tr("cli.help.debug"))

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help=tr("cli.help.list"))

    show = commands.add_parser("show", help=tr("cli.help.show"))
    show.add_argument("pathway_id")

    save_path = commands.add_parser("save-path", help=tr("cli.help.save_path"))
    save_path.add_argument("pathway_id")
    save_path.add_argument("--name", default=None)

    auto_save_path = commands.add_parser("auto-save-path", help=tr("cli.help.auto_save_path"))
    auto_save_path.add_argument("pathway_id")

    delete = commands.add_parser("delete", help=tr("cli.help.delete"))
    delete.add_argument("pathway_id")

    delete_file = commands.add_parser("delete-file", help=tr("cli.help.delete_file"))
    delete_file.add_argument("pathway_id")
    delete_file.add_argument("file_name")

    set_root = commands.add_parser("set-root", help=tr("cli.help.set_root"))
    set_root.add_argument("root")
    return parser


def _print_config(config: PathwaysConfig) -> None:
    print(tr("config.storage", root=config.storage_root))
    print(tr("config.extension", extension=config.save_extension))


def _command_list(manager: PathwaysManager) -> int:
    pathways = manager.get_all_pathways()
    if not pathways:
        print(tr("list.empty", root=manager.storage_location))
        return 0

    current = manager.select_recent_pathway()
    print(f"  {tr('list.header.id'):<24} {tr('list.header.files'):>5}  {tr('list.header.recent')}")
    for pathway in pathways:
        marker = "*" if pathway is current else " "
        print(f"{marker} {pathway.pathway_id:<24} {pathway.file_count:>5}  {_recent_name(pathway)}")
    return 0


def _print_files(title: str, files: list[SaveFileInfo]) -> None:
    print(f"{title} ({len(files)})")
    for item in files:
        print(f"  {item.modified_at:%Y-%m-%d %H:%M:%S}  {item.size_bytes:>10}  {item.name}")


def _command_show(manager: PathwaysManager, pathway_id: str) -> int:
    if pathway_id not in manager.get_all_pathway_ids():
        print(tr("pathway.missing", pathway_id=pathway_id))
        return 1

    pathway = manager.set_current_pathway(pathway_id)
    status = tr("show.on") if manager.can_auto_save else tr("show.off")
    print(f"{tr('show.id')}: {pathway.pathway_id}")
    print(
        f"{tr('show.auto_save')}: "
        + tr(
            "show.auto_save_status",
            status=status,
            slots=manager.auto_save_slots,
            interval=manager.auto_save_interval,
        )
    )
    print(f"{tr('show.file_count')}: {pathway.file_count}")
    print(f"{tr('show.recent')}: {_recent_name(pathway)}")
    print(f"{tr('show.path')}: {pathway.full_path}")
    _print_files(tr("show.manual_saves"), pathway.get_manual_saves())
    _print_files(tr("show.auto_saves"), pathway.get_auto_saves())
    return 0


def _command_delete(manager: PathwaysManager, pathway_id: str) -> int:
    if pathway_id not in manager.get_all_pathway_ids():
        print(tr("pathway.missing", pathway_id=pathway_id))
        return 1

    manager.set_current_pathway(pathway_id)
    if not manager.delete_current_pathway():
        print(tr("pathway.missing", pathway_id=pathway_id))
        return 1
    print(tr("delete.done", pathway_id=pathway_id))
    return 0


def _command_delete_file(manager: PathwaysManager, pathway_id: str, file_name: str) -> int:
    manager.set_current_pathway(pathway_id)
    if not manager.delete_file(file_name):
        print(tr("delete_file.missing", file_name=file_name, pathway_id=pathway_id))
        return 1
    print(tr("delete_file.done", file_name=file_name, pathway_id=pathway_id))
    return 0


def run_command(args: argparse.Namespace, manager: PathwaysManager) -> int:
    if args.command == "list":
        return _command_list(manager)
    if args.command == "show":
        return _command_show(manager, args.pathway_id)
    if args.command == "save-path":
        manager.set_current_pathway(args.pathway_id)
        print(manager.get_manual_save_path(args.name))
        return 0
    if args.command == "auto-save-path":
        manager.set_current_pathway(args.pathway_id)
        print(manager.get_auto_save_path())
        return 0
    if args.command == "delete":
        return _command_delete(manager, args.pathway_id)
    if args.command == "delete-file":
        return _command_delete_file(manager, args.pathway_id, args.file_name)
    if args.command == "set-root":
        manager.set_storage_location(args.root)
        print(tr("set_root.done", root=manager.storage_location, count=len(manager.get_all_pathways())))
        return 0
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    ensure_runtime_directories()
    initialize_i18n("en")
    args = build_parser().parse_args(argv)

    logger, _emitter = setup_logging(level=logging.DEBUG if args.debug else logging.INFO, console=args.debug)
    try:
        config = PathwaysConfig(args.config_path)
        if args.language:
            config.set_language(args.language)
        initialize_i18n(config.get_language())

        manager = PathwaysManager(config, logger=logger.getChild("manager"))
        exit_code = run_command(args, manager)
    except ValueError as error:
        logger.error("Invalid configuration: %s", error)
        print(tr("error.invalid_config", message=error))
        return 2
    except OSError as error:
        logger.error("File system error: %s", error)
        print(tr("error.filesystem", message=error))
        return 1

    if args.command in {"list", "show"}:
        _print_config(config)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
