# flake8: noqa F401

from .partitioner import Partitioner, Partition, StorageLocation, Enumerate, Fixed
from .batcher import StatementBatcher, MAX_SQL_LENGTH
from .athena import QueryExecutor
from .utils import (
    PartitionerError,
    ConfigurationError,
    OrgNotFound,
    ListingError,
    SubmissionError,
    StatementTooLarge,
)
from .cli import Cli

cli = Cli().main
