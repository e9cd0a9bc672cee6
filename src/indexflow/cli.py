"""索引创建命令行入口.

用法:
    indexflow-create [--manager NAME] [--no-mapping] [--if-not-exists]
                     [--time] [--alias] [--dump] [--config PATH] [-v]
"""

import argparse
import logging
import sys

from .config import DEFAULT_MANAGER, default_config_path, load_config
from .connection import create_client
from .exceptions import IndexFlowError
from .rotation import CommandResult, CreateIndexOptions, RotationOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="indexflow-create",
        description=(
            "Create a new Elasticsearch index for a configured manager, "
            "optionally rotating the manager's alias onto it."
        ),
    )
    parser.add_argument(
        "--manager",
        default=DEFAULT_MANAGER,
        help="Manager name (default: %(default)s)",
    )
    parser.add_argument(
        "--no-mapping",
        action="store_true",
        help="Do not send the mapping document when creating the index",
    )
    parser.add_argument(
        "--if-not-exists",
        action="store_true",
        help="Succeed without creating when the index already exists",
    )
    parser.add_argument(
        "--time",
        action="store_true",
        help="Append a timestamp suffix to the new index name",
    )
    parser.add_argument(
        "--alias",
        action="store_true",
        help="Rotate the manager alias onto the new time-suffixed index",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the current index mapping as JSON and exit",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the JSON config file (default: {default_config_path()})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    return parser


def parse_options(args: argparse.Namespace) -> CreateIndexOptions:
    return CreateIndexOptions(
        manager=args.manager,
        no_mapping=args.no_mapping,
        if_not_exists=args.if_not_exists,
        time=args.time,
        alias=args.alias,
        dump=args.dump,
    )


def render(result: CommandResult) -> None:
    """把命令结果写到标准输出/标准错误."""
    stream = sys.stdout if result.ok else sys.stderr
    for message in result.messages:
        print(message, file=stream)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = parse_options(args)
        config = load_config(args.config)
        client = create_client(config.cluster, config.connection)
    except IndexFlowError as e:
        print(str(e), file=sys.stderr)
        return 1

    try:
        result = RotationOrchestrator(config.registry, client).run(options)
    finally:
        client.close()

    render(result)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
