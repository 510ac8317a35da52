"""
Command-Line Interface

Usage:
    python -m redis_connector browse --operation-type UPSERT
    python -m redis_connector test-connection --hosts "cache-1:6379;cache-2:6379"
"""

import sys
from enum import Enum

import orjson

from redis_connector.connector import RedisConnector
from redis_connector.core.config.constants import PROPERTY_HOSTS, ObjectDefinitionRole, OperationType
from redis_connector.core.config.settings import get_settings
from redis_connector.core.exceptions import ConnectorBaseError
from redis_connector.core.logging.logger import get_logger, setup_logging
from redis_connector.operations.models import BrowseContext


class ExitCode(Enum):
    SUCCESS = 0
    GENERAL_ERROR = 1


def create_parser():
    """Create command-line argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="redis-connector",
        description="Browse object types and test connectivity of the Redis connector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s browse                              # Object types and GET definitions
  %(prog)s browse --operation-type UPSERT      # UPSERT input/output definitions
  %(prog)s test-connection --hosts cache-1:6379
        """,
    )

    parser.add_argument("command", choices=["browse", "test-connection"], help="Operation to perform")

    parser.add_argument(
        "--hosts",
        metavar="NODES",
        help="Semicolon-delimited node list, primary first (default: REDIS_HOSTS)",
    )

    parser.add_argument(
        "--operation-type",
        choices=[OperationType.GET.value, OperationType.UPSERT.value, OperationType.DELETE.value],
        default=OperationType.GET.value,
        help="Operation whose definitions are listed by browse (default: GET)",
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    app = get_settings().app
    parser.add_argument("--version", action="version", version=f"{app.APP_NAME} {app.APP_VERSION}")

    return parser


def browse(connector: RedisConnector, context: BrowseContext) -> dict:
    browser = connector.create_browser(context)
    roles = [ObjectDefinitionRole.INPUT, ObjectDefinitionRole.OUTPUT]
    object_types = browser.get_object_types()
    return {
        "operation_type": context.operation_type.value,
        "object_types": [object_type.to_dict() for object_type in object_types],
        "definitions": {
            object_type.id: [
                definition.to_dict()
                for definition in browser.get_object_definitions(object_type.id, roles)
            ]
            for object_type in object_types
        },
    }


def main(argv: list[str] | None = None) -> int:
    """Application entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(log_level="DEBUG" if args.verbose else None)
    logger = get_logger(__name__)

    connection_properties = {PROPERTY_HOSTS: args.hosts} if args.hosts else {}
    context = BrowseContext(
        operation_type=OperationType(args.operation_type),
        connection_properties=connection_properties,
    )

    try:
        with RedisConnector() as connector:
            if args.command == "browse":
                sys.stdout.write(orjson.dumps(browse(connector, context), option=orjson.OPT_INDENT_2).decode("utf-8"))
                sys.stdout.write("\n")
            else:
                connector.create_browser(context).test_connection()
                sys.stdout.write("PONG\n")
        return ExitCode.SUCCESS.value

    except ConnectorBaseError as e:
        logger.error("Command failed", command=args.command, **e.to_dict())
        sys.stderr.write(f"{e.message}\n")
        return ExitCode.GENERAL_ERROR.value
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user")
        return ExitCode.GENERAL_ERROR.value


if __name__ == "__main__":
    sys.exit(main())
