"""
FileDepot Server - Command Line Interface

Runs storage operations against the local file index without the HTTP server:
saving staged files, showing, searching and deleting records, and checking
the index against the files on disk.
"""

import argparse
import logging
import sys
from typing import List, Optional

from exceptions import FileDepotError, InvalidModelClassError
from file_manager import FileManager
from managers.config_manager import ConfigManager
from managers.database_manager import DatabaseManager
from resources import LocalFileResource


# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

logger = logging.getLogger(__name__)


def setup_cli_logging(config_manager: ConfigManager) -> None:
    """
    Setup console logging for CLI mode.

    Args:
        config_manager: ConfigManager instance for log settings
    """
    log_level = config_manager.get("log_level", "INFO")

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def describe_model(file_manager: FileManager, model) -> str:
    """Format a file model as one line of output"""
    return (
        f"{model.id}\t{model.ResolveInternalPath()}\t{model.mime_type}\t"
        f"{model.byte_size}\t{file_manager.GetFileState(model).value}\t{model.hash or '-'}"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation"""
    parser = argparse.ArgumentParser(
        description='FileDepot - Managed file storage',
    )
    parser.add_argument('--config', help='Path to configuration file (default: filedepot.json)')

    commands = parser.add_subparsers(dest='command', required=True)

    save = commands.add_parser('save', help='Store a file')
    save.add_argument('source', help='Path of the file to store')
    save.add_argument('--name', help='Name for the stored file, without extension')
    save.add_argument('--path', help='Sub-directory within the files directory')
    save.add_argument('--mime-type', help='Content type (guessed from the filename by default)')

    show = commands.add_parser('show', help='Show a stored file')
    show.add_argument('id', type=int)

    delete = commands.add_parser('delete', help='Delete a stored file and its record')
    delete.add_argument('id', type=int)

    search = commands.add_parser('search', help='Search stored files')
    for attribute in ('name', 'path', 'extension', 'filename', 'mime-type', 'hash', 'created-at'):
        search.add_argument(f'--{attribute}')
    search.add_argument('--page', type=int, default=1)
    search.add_argument('--page-size', type=int, default=20)
    search.add_argument('--order-by', help="Attribute to order by, '-' prefix for descending")

    commands.add_parser('check', help='Compare the file index with the files on disk')

    return parser


def run_command(args: argparse.Namespace, file_manager: FileManager) -> int:
    """
    Execute the parsed sub-command.

    Args:
        args: Parsed arguments
        file_manager: FileManager to operate on

    Returns:
        Exit code
    """
    if args.command == 'save':
        resource = LocalFileResource(args.source, mime_type=args.mime_type)
        model = file_manager.SaveModel(resource, name=args.name, path=args.path)
        print(describe_model(file_manager, model))
        return EXIT_SUCCESS

    if args.command == 'show':
        model = file_manager.LoadModel(args.id)
        if model is None:
            logger.error(f"File not found: {args.id}")
            return EXIT_FAILURE
        print(describe_model(file_manager, model))
        print(file_manager.ResolvePath(model))
        return EXIT_SUCCESS

    if args.command == 'delete':
        file_manager.DeleteModel(args.id)
        print(f"Deleted file {args.id}")
        return EXIT_SUCCESS

    if args.command == 'search':
        criteria = {
            'name': args.name, 'path': args.path, 'extension': args.extension,
            'filename': args.filename, 'mime_type': args.mime_type, 'hash': args.hash,
            'created_at': args.created_at
        }
        result = file_manager.SearchModels(criteria, args.page, args.page_size, args.order_by)
        for model in result.items:
            print(describe_model(file_manager, model))
        print(f"Page {result.page} of {result.page_count} ({result.total} files)")
        return EXIT_SUCCESS

    if args.command == 'check':
        report = file_manager.FindInconsistencies()
        for record_id in report.missing_files:
            print(f"missing file\t{record_id}")
        for record_id in report.unverified_files:
            print(f"no hash\t{record_id}")
        for record_id in report.hash_mismatches:
            print(f"hash mismatch\t{record_id}")
        for path in report.orphaned_files:
            print(f"orphaned file\t{path}")
        return EXIT_SUCCESS if report.IsConsistent() else EXIT_FAILURE

    logger.error(f"Unknown command: {args.command}")
    return EXIT_FAILURE


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the FileDepot CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    config_manager.load_config()
    setup_cli_logging(config_manager)

    try:
        storage_config = config_manager.get_storage_config()
        db_manager = DatabaseManager(storage_config.database_path)
        file_manager = FileManager(db_manager, storage_config)
        db_manager.InitializeDatabase()
    except InvalidModelClassError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    try:
        return run_command(args, file_manager)

    except FileDepotError as e:
        logger.error(f"{args.command} failed: {e}")
        return EXIT_FAILURE

    finally:
        db_manager.Dispose()


if __name__ == '__main__':
    sys.exit(main())
