"""
Command-line interface for the SQL map configuration system.

Assembles a configuration document and logs a summary of the result, which makes
it easy to check a document (and its property files and mappers) before deploying.
"""

import argparse
import logging
import os
import sys

from typing import Dict, List, Optional

from .builder.config_builder import XMLConfigBuilder
from .exceptions import SqlMapConfigError


def _parse_property(value: str) -> tuple:
    key, separator, property_value = value.partition('=')
    if not separator or not key:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got '{value}'")
    return key, property_value


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlmap-config",
        description="Assemble and validate a SQL map configuration document.")
    parser.add_argument("config", nargs="?", default=os.environ.get("SQLMAP_CONFIG_PATH"),
                        help="Configuration document (default: $SQLMAP_CONFIG_PATH)")
    parser.add_argument("-e", "--environment", default=os.environ.get("SQLMAP_CONFIG_ENVIRONMENT"),
                        help="Target environment id (default: $SQLMAP_CONFIG_ENVIRONMENT or the document default)")
    parser.add_argument("-p", "--property", action="append", type=_parse_property, default=[],
                        metavar="KEY=VALUE", help="Substitution variable; may be repeated")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI application.

    Args:
        args: Optional command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if args is None:
        args = sys.argv[1:]
    options = build_argument_parser().parse_args(args)

    # Set up logging without reconfiguring root if already configured
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, options.log_level))
    logger = logging.getLogger(__name__)

    if not options.config:
        logger.error("No configuration document given (argument or SQLMAP_CONFIG_PATH)")
        return 2

    properties: Dict[str, str] = dict(options.property)
    try:
        configuration = XMLConfigBuilder(options.config, options.environment, properties).parse()
    except SqlMapConfigError as e:
        logger.error(f"Configuration assembly failed: {e}")
        return 1

    summary = configuration.get_configuration_summary()
    logger.info("=== Configuration Summary ===")
    logger.info(f"Environment: {summary['environment']['id']} (requested: {summary['environment']['requested_id']})")
    logger.info(f"Transaction Factory: {summary['environment']['transaction_factory']}")
    logger.info(f"Data Source: {summary['environment']['data_source']}")
    logger.info(f"Database Id: {summary['environment']['database_id']}")
    logger.info(f"Interceptors: {', '.join(summary['interceptors']) or '-'}")
    logger.info(f"Mappers: {len(summary['mappers'])}")
    logger.info(f"Mapped Statements: {len(summary['mapped_statements'])}")
    for key, value in summary['settings'].items():
        logger.debug(f"Setting {key} = {value}")

    if not configuration.environment_resolved:
        logger.warning(f"Environment '{configuration.requested_environment_id}' is not declared in the document")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
