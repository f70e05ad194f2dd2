import argparse
import logging
import ctpartition.text.cli_text as cli_text
import sys
from ctpartition import Partitioner, PartitionerError, ConfigurationError
from .athena import QueryExecutor, DEFAULT_DATABASE
from .batcher import StatementBatcher, DEFAULT_TABLE
from .serverless_function import register_partitions


def add_period_args(parser):
    parser.add_argument("--year", type=str, default="", help="year to partition")
    parser.add_argument("--month", type=str, default="", help="month to partition")
    parser.add_argument(
        "--current-month",
        action="store_true",
        help="Only partition the current month. Can't be combined with --year or --month.")


def add_catalog_args(parser):
    parser.add_argument(
        "--database",
        type=str,
        default=DEFAULT_DATABASE,
        help="The Athena database to create the table in")
    parser.add_argument(
        "--table",
        type=str,
        default=DEFAULT_TABLE,
        help="The Athena table to create and add partitions to")


def add_flag_args(parser):
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Perform a \"dry-run\", print the statements instead of running them.")
    parser.add_argument("--profile", "-p", type=str, help="AWS profile to use")
    parser.add_argument("--region", type=str, help="AWS region to use")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every S3 and Athena call")


class Cli(object):
    def main(self, passed_args=None):
        parser = argparse.ArgumentParser(
            prog="ctpartition",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=cli_text.description,
            epilog=cli_text.epilog)
        parser.add_argument(
            "--cloudtrail",
            type=str,
            default="",
            help="AWS bucket name for cloudtrail logs")
        parser.add_argument(
            "--athena-results",
            type=str,
            default="",
            help="AWS bucket name/path to store athena results")
        parser.add_argument(
            "--org-id",
            type=str,
            help="Organization id to use when the bucket holds more than one")
        add_period_args(parser)
        add_catalog_args(parser)
        add_flag_args(parser)

        if passed_args:
            args = parser.parse_args(passed_args)
        else:
            args = parser.parse_args()  # pragma: no cover

        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

        try:
            count = self.create_partitions(args)
        except PartitionerError as e:
            print(f"Error: {self.error_message(e, args)}", file=sys.stderr)
            sys.exit(1)
            return

        print(f"{count} partitions processed")

    def create_partitions(self, args):
        if not args.cloudtrail:
            raise ConfigurationError("cloudtrail is a required parameter")
        if not args.athena_results:
            raise ConfigurationError("athena-results is a required parameter")

        partitioner = self.get_partitioner(args)
        executor = QueryExecutor(
            partitioner.session.client("athena"),
            args.athena_results,
            database=args.database)
        batcher = StatementBatcher(table=args.table)

        return register_partitions(partitioner, executor, batcher, dry_run=args.dry_run)

    def get_partitioner(self, args):
        return Partitioner(
            args.cloudtrail,
            year=args.year,
            month=args.month,
            current_month=args.current_month,
            org_id=args.org_id,
            aws_profile=args.profile,
            aws_region=args.region)

    def error_message(self, error, args):
        message = error.message
        if error.error_type == "ProfileNotFound":
            message += f"\n\tConfirm that {args.profile} is a locally configured aws profile."
        if error.error_type == "AmbiguousOrg":
            message += "\n\tUse --org-id to pick one."
        if error.error_type == "OrgNotFound":
            message += f"\n\tConfirm {args.cloudtrail} holds an organization trail."
        return message
