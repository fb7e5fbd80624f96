# main.py
import argparse
import os
import sys
import time

from alias_reindex.cluster import SearchCluster
from alias_reindex.config import (
    DEFAULT_SLICES,
    DEFAULT_TARGET_SHARD_COUNT,
    THROTTLE_DOCS_PER_SEC,
    MigrationConfig,
    configure_logging,
    create_client,
    logger,
)
from alias_reindex.errors import ConfigurationError, MigrationError
from alias_reindex.migration import migrate

# To reindex the index behind an alias and repoint the alias:
#   alias-reindex --url http://localhost:9200 --alias products
#
# To copy a bare index under a chosen name:
#   alias-reindex --url http://localhost:9200 --index products_v1 --new-index products_v2


def build_parser():
    parser = argparse.ArgumentParser(
        prog="alias-reindex",
        description="Reindex an index into a new one and switch its alias without downtime."
    )
    parser.add_argument(
        "--alias", default="",
        help="Alias name. If the alias points to several indices, pass --index as well. "
             "Can be skipped when no alias is defined."
    )
    parser.add_argument(
        "--index", default="",
        help="Existing index name. Use --alias too if the new index must be attached to the alias."
    )
    parser.add_argument(
        "--new-index", default="",
        help="New index name. Defaults to the source prefix plus a YYYY-MM-DD-HH-MM timestamp."
    )
    parser.add_argument("--extra-alias", default="",
                        help="Additional alias to move to the new index.")
    parser.add_argument("--url", default=os.getenv("ES_URL", ""),
                        help="Elasticsearch url (env: ES_URL).")
    parser.add_argument("--user", default=os.getenv("ES_USER", ""),
                        help="Basic auth user name (env: ES_USER).")
    parser.add_argument("--password", default=os.getenv("ES_PASSWORD", ""),
                        help="Basic auth password (env: ES_PASSWORD).")
    parser.add_argument("--template-name", default="",
                        help="Index template name. Defaults to the template file name.")
    parser.add_argument("--template-location", default="",
                        help="Absolute path to the index template file.")
    parser.add_argument(
        "--slices", "--slice", dest="slices", default=DEFAULT_SLICES,
        help="Number of reindex slices, 'auto', or 'disable' to turn slicing off."
    )
    parser.add_argument(
        "--target-shard-count", type=int, default=DEFAULT_TARGET_SHARD_COUNT,
        help="Primary shards of the new index. Defaults to the source count; "
             "ignored when --template-location is set."
    )
    parser.add_argument("--requests-per-second", type=int, default=THROTTLE_DOCS_PER_SEC,
                        help="Reindex throttle. Default -1 is unthrottled.")
    parser.add_argument("--request-timeout", type=float, default=None,
                        help="Seconds to wait for the reindex call. Default waits until it finishes.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Verbose output.")
    return parser


def config_from_args(args):
    return MigrationConfig(
        url=args.url,
        alias=args.alias,
        index=args.index,
        new_index=args.new_index,
        extra_alias=args.extra_alias,
        username=args.user,
        password=args.password,
        template_location=args.template_location,
        template_name=args.template_name,
        slices=args.slices,
        target_shard_count=args.target_shard_count,
        requests_per_second=args.requests_per_second,
        request_timeout=args.request_timeout,
        verbose=args.verbose,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(args)
    try:
        config.validate()
    except ConfigurationError as e:
        parser.print_help(sys.stderr)
        parser.exit(2, f"\n{parser.prog}: error: {e}\n")

    configure_logging(config.verbose)
    cluster = SearchCluster(create_client(config), request_timeout=config.request_timeout)

    start = time.monotonic()
    try:
        migrate(cluster, config)
    except MigrationError as e:
        logger.error("❌ %s", e)
        return 1
    finally:
        logger.info("Took: %.1fs", time.monotonic() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
