"""
DetaKit - CLI Module

Implements the `detakit` command for working with Base and Drive from a
shell. Results are written to stdout as JSON or raw bytes; logs go to stderr.

Author: DetaKit Project
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Optional, List

from .deta import Deta
from .managers import ConfigManager
from .exceptions import ErrorKind, DetaError, DetaAuthError


# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_AUTH_ERROR = 3


def setup_cli_logging(log_level: str):
    """
    Setup logging for CLI mode.

    Args:
        log_level: Level name, e.g. "INFO" or "DEBUG"
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)  # stdout carries command output
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog='detakit',
        description='DetaKit - command line access to Deta Base and Drive'
    )
    parser.add_argument('--project-key', help='Project key (defaults to DETA_PROJECT_KEY or the stored key)')
    parser.add_argument('--config', help='Path to detakit.json')
    parser.add_argument('--log-level', help='Log level (overrides config)')

    services = parser.add_subparsers(dest='service', required=True)

    login = services.add_parser('login', help='Store a project key in the OS credential store')
    login.add_argument('key', help='Project key to store')

    base = services.add_parser('base', help='Base operations')
    base.add_argument('name', help='Base name')
    base_ops = base.add_subparsers(dest='operation', required=True)
    base_get = base_ops.add_parser('get', help='Get an item by key')
    base_get.add_argument('key')
    base_put = base_ops.add_parser('put', help='Put an item given as JSON')
    base_put.add_argument('item')
    base_delete = base_ops.add_parser('delete', help='Delete an item by key')
    base_delete.add_argument('key')
    base_fetch = base_ops.add_parser('fetch', help='Fetch one page of items')
    base_fetch.add_argument('--query', help='Query as JSON (a group or a list of groups)')
    base_fetch.add_argument('--limit', type=int, default=0)
    base_fetch.add_argument('--last', help='Cursor from the previous page')

    drive = services.add_parser('drive', help='Drive operations')
    drive.add_argument('name', help='Drive name')
    drive_ops = drive.add_subparsers(dest='operation', required=True)
    drive_put = drive_ops.add_parser('put', help='Upload a local file')
    drive_put.add_argument('path')
    drive_put.add_argument('--as', dest='file_name', help='Name in the drive (defaults to the file name)')
    drive_put.add_argument('--content-type')
    drive_get = drive_ops.add_parser('get', help='Download a file')
    drive_get.add_argument('file_name')
    drive_get.add_argument('-o', '--output', help='Write to this path instead of stdout')
    drive_list = drive_ops.add_parser('list', help='List one page of file names')
    drive_list.add_argument('--prefix')
    drive_list.add_argument('--limit', type=int, default=1000)
    drive_list.add_argument('--last', help='Cursor from the previous page')
    drive_delete = drive_ops.add_parser('delete', help='Delete files')
    drive_delete.add_argument('file_names', nargs='+')

    return parser


def _print_json(value):
    print(json.dumps(value, indent=2))


def run_base_operation(deta: Deta, args) -> int:
    """Execute a base subcommand."""
    base = deta.Base(args.name)
    if args.operation == 'get':
        _print_json(base.get(args.key))
    elif args.operation == 'put':
        _print_json({"key": base.put(json.loads(args.item))})
    elif args.operation == 'delete':
        base.delete(args.key)
    elif args.operation == 'fetch':
        query = json.loads(args.query) if args.query else None
        result = base.fetch(query, limit=args.limit, last=args.last)
        _print_json(result.model_dump())
    return EXIT_SUCCESS


def run_drive_operation(deta: Deta, args) -> int:
    """Execute a drive subcommand."""
    logger = logging.getLogger(__name__)
    drive = deta.Drive(args.name)
    if args.operation == 'put':
        file_name = args.file_name or Path(args.path).name

        def cli_progress_callback(name: str, part: int, bytes_sent: int):
            logger.info(f"{name}: part {part} sent ({bytes_sent} bytes)")

        drive.put(file_name, path=args.path, content_type=args.content_type,
                  progress_callback=cli_progress_callback)
        _print_json({"name": file_name})
    elif args.operation == 'get':
        with drive.get(args.file_name) as content:
            if args.output:
                with open(args.output, 'wb') as f:
                    for chunk in content.iter_chunks():
                        f.write(chunk)
            else:
                for chunk in content.iter_chunks():
                    sys.stdout.buffer.write(chunk)
    elif args.operation == 'list':
        result = drive.list(limit=args.limit, prefix=args.prefix, last=args.last)
        _print_json(result.model_dump())
    elif args.operation == 'delete':
        result = drive.delete_many(args.file_names)
        _print_json(result.model_dump())
        if result.failed:
            return EXIT_FAILURE
    return EXIT_SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the detakit command.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)

    config_mgr = ConfigManager(args.config)
    config_mgr.load_config()
    setup_cli_logging(args.log_level or config_mgr.get("log_level", "INFO"))
    logger = logging.getLogger(__name__)

    try:
        if args.service == 'login':
            if len(args.key.split("_")) != 2:
                logger.error("Project key must have the form <project_id>_<secret>")
                return EXIT_CONFIG_ERROR
            config_mgr.store_project_key(args.key)
            return EXIT_SUCCESS

        deta = Deta(args.project_key, config_manager=config_mgr)
        if args.service == 'base':
            return run_base_operation(deta, args)
        return run_drive_operation(deta, args)

    except DetaAuthError as e:
        logger.error(f"Authentication failed: {e}")
        return EXIT_AUTH_ERROR

    except DetaError as e:
        if e.kind is ErrorKind.BAD_PROJECT_KEY:
            logger.error("No valid project key. Pass --project-key, set DETA_PROJECT_KEY or run 'detakit login'.")
            return EXIT_CONFIG_ERROR
        logger.error(f"Error: {e}")
        return EXIT_FAILURE

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON argument: {e}")
        return EXIT_CONFIG_ERROR

    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user (Ctrl+C)")
        return EXIT_FAILURE


if __name__ == '__main__':
    sys.exit(main())
