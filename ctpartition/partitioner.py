import boto3
import botocore
import datetime
import logging
from collections import namedtuple
from .lister import PathLister
from .utils import ConfigurationError, OrgNotFound

logger = logging.getLogger(__name__)

ROOT_PREFIX = "AWSLogs/"
ORG_ID_PREFIX = "o-"


class StorageLocation(namedtuple("StorageLocation", ["bucket", "prefix"])):
    __slots__ = ()

    @property
    def uri(self):
        path = self.prefix
        if path.endswith("/"):
            path = path[:-1]
        return f"s3://{self.bucket}/{path}"

    def __str__(self):
        return self.uri


class Partition(namedtuple("Partition", ["account", "region", "year", "month", "location"])):
    __slots__ = ()

    def __str__(self):
        joined_values = ", ".join(self.values)
        return f"[{joined_values}]"

    def __repr__(self):
        return f"<Partition {str(self)} / {self.location.uri}>"

    @property
    def values(self):
        return [self.account, self.region, self.year, self.month]


class Enumerate(object):
    """Take every child found under the current prefix."""

    def values(self, lister, prefix):
        return lister.list_children(prefix)

    def __repr__(self):
        return "Enumerate()"


class Fixed(object):
    """Use a single known value, without listing."""

    def __init__(self, value):
        self.value = value

    def values(self, lister, prefix):
        return [self.value]

    def __repr__(self):
        return f"Fixed({self.value!r})"


Level = namedtuple("Level", ["name", "strategy", "suffix"])


def resolve_period(year=None, month=None, current_month=False, now=None):
    """Return the (year, month) to pin, either of which may be None.

    current_month pins both to today's date and cannot be combined with an
    explicit year or month.
    """

    if current_month:
        if year or month:
            raise ConfigurationError("current-month cannot be true when passing year or month")

        if now is None:
            now = datetime.datetime.now()
        return now.strftime("%Y"), now.strftime("%m")

    return year or None, month or None


class Partitioner(object):
    def __init__(
            self,
            bucket,
            year=None,
            month=None,
            current_month=False,
            org_id=None,
            aws_profile=None,
            aws_region=None,
            now=None,
            page_size=50):
        if not bucket:
            raise ConfigurationError("cloudtrail bucket is a required parameter")

        self.bucket = bucket
        self.year, self.month = resolve_period(year, month, current_month, now=now)
        self.org_id = org_id

        try:
            self.session = boto3.Session(
                profile_name=aws_profile,
                region_name=aws_region)
        except botocore.exceptions.ProfileNotFound as e:
            raise ConfigurationError(
                error_type="ProfileNotFound",
                message=f"No such profile {aws_profile}.",
                source=e)

        self.s3 = self.session.client("s3")
        self.lister = PathLister(self.s3, self.bucket, page_size=page_size)
        self.prefix = ROOT_PREFIX

    @property
    def levels(self):
        return [
            Level("account", Enumerate(), "CloudTrail/"),
            Level("region", Enumerate(), ""),
            Level("year", self._strategy(self.year), ""),
            Level("month", self._strategy(self.month), ""),
        ]

    @staticmethod
    def _strategy(value):
        if value:
            return Fixed(value)
        return Enumerate()

    @property
    def location(self):
        return StorageLocation(self.bucket, self.prefix)

    def find_org(self):
        """Locate the organization id below AWSLogs/ and extend the prefix with it.

        Organization trails write to AWSLogs/o-<id>/. Exactly one such
        directory has to exist unless an org id was given up front.
        """

        if self.prefix != ROOT_PREFIX:
            return self.org_id

        if not self.org_id:
            candidates = [
                name for name in self.lister.list_children(ROOT_PREFIX)
                if name.startswith(ORG_ID_PREFIX)]

            if not candidates:
                raise OrgNotFound(
                    f"Could not find org id in bucket {self.bucket} under {ROOT_PREFIX}")
            if len(candidates) > 1:
                joined = ", ".join(candidates)
                raise ConfigurationError(
                    error_type="AmbiguousOrg",
                    message=f"Found more than one org id in bucket {self.bucket}: {joined}. Pass one explicitly.")

            self.org_id = candidates[0]

        self.prefix = f"{ROOT_PREFIX}{self.org_id}/"
        logger.debug("using org %s, prefix %s", self.org_id, self.prefix)
        return self.org_id

    def partitions_on_disk(self):
        """Find partitions in S3.

        Walks account, region, year and month below the organization's prefix
        and yields a :obj:`Partition` for each month found, in the order S3
        lists them. Pinned years or months are used as-is without checking
        that they exist.

        This is a generator; listing happens as it is consumed.
        """

        self.find_org()
        return self._partition_finder(self.prefix, self.levels)

    def _partition_finder(self, prefix, levels, idx=0, values=()):
        this_level = levels[idx]
        last_level = idx == len(levels) - 1

        for value in this_level.strategy.values(self.lister, prefix):
            these_values = values + (value,)
            this_prefix = f"{prefix}{value}/{this_level.suffix}"

            if last_level:
                yield Partition(*these_values, StorageLocation(self.bucket, this_prefix))
            else:
                yield from self._partition_finder(this_prefix, levels, idx=idx + 1, values=these_values)
