from .athena import QueryExecutor, DEFAULT_DATABASE
from .batcher import StatementBatcher, DEFAULT_TABLE
from .partitioner import Partitioner
from .text.table_ddl import create_table_sql
from .utils import ConfigurationError


def register_partitions(partitioner, executor, batcher=None, dry_run=False):
    """Create the table, then add every partition found in S3 to it.

    Statements are submitted one at a time as they fill up, so a failed
    submission stops the run with earlier statements already started.

    Returns:
        the number of partitions processed
    """

    if batcher is None:
        batcher = StatementBatcher()

    print(f"Running Partitioner for s3://{partitioner.bucket}/{partitioner.prefix}")
    partitioner.find_org()
    print(f"\tLooking for partitions in {partitioner.location.uri}/")

    submit = executor.submit
    if dry_run:
        submit = print

    submit(create_table_sql(partitioner.bucket, partitioner.prefix, table=batcher.table))

    statement_count = 0
    for statement in batcher.statements(partitioner.partitions_on_disk()):
        submit(statement)
        statement_count += 1

    print(f"\tBuilt {statement_count} statements for {batcher.clause_count} partitions")
    return batcher.clause_count


TRUE_VALUES = ("true", "yes", "1")
FALSE_VALUES = ("false", "no", "0", "")


def event_flag(event, key):
    value = event.get(key, False)
    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        if value.strip().lower() in TRUE_VALUES:
            return True
        if value.strip().lower() in FALSE_VALUES:
            return False

    raise ConfigurationError(f"{key} must be true or false, got {value!r}")


def handle(event, context):
    if not event.get("athena_results"):
        raise ConfigurationError("athena-results is a required parameter")

    if "region" in event:
        region = event["region"]
    else:
        region = None

    partitioner = Partitioner(
        event.get("cloudtrail"),
        year=event.get("year"),
        month=event.get("month"),
        current_month=event_flag(event, "current_month"),
        org_id=event.get("org_id"),
        aws_profile=None,
        aws_region=region)

    executor = QueryExecutor(
        partitioner.session.client("athena"),
        event["athena_results"],
        database=event.get("database", DEFAULT_DATABASE))
    batcher = StatementBatcher(table=event.get("table", DEFAULT_TABLE))

    return {"partitions": register_partitions(partitioner, executor, batcher)}
