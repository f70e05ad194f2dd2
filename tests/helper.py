from contextlib import contextmanager
from faker import Faker
from ctpartition import Partition, StorageLocation
from io import StringIO
import boto3
import sys


@contextmanager
def captured_output():
    new_out, new_err = StringIO(), StringIO()
    old_out, old_err = sys.stdout, sys.stderr
    try:
        sys.stdout, sys.stderr = new_out, new_err
        yield sys.stdout, sys.stderr
    finally:
        sys.stdout, sys.stderr = old_out, old_err


class CloudTrailHelper(object):
    def __init__(self, default_bucket="test-bucket", default_org="o-abc123def4", region="us-east-1"):
        self.default_bucket = default_bucket
        self.default_org = default_org
        self.region = region
        self.faker = Faker()

    def create_bucket(self, bucket=None):
        if not bucket:
            bucket = self.default_bucket

        s3 = boto3.client("s3", region_name=self.region)
        s3.create_bucket(Bucket=bucket)

    def create_account_ids(self, count=3):
        accounts = set()
        while len(accounts) < count:
            accounts.add(self.faker.numerify("############"))
        return sorted(accounts)

    def partition_prefix(self, account, region, year, month, org=None):
        if not org:
            org = self.default_org
        return f"AWSLogs/{org}/{account}/CloudTrail/{region}/{year}/{month}/"

    def write_log(self, account, region, year, month, day="01", org=None, bucket=None):
        """Write a single CloudTrail log file, returning the Partition it belongs to."""

        if not bucket:
            bucket = self.default_bucket

        prefix = self.partition_prefix(account, region, year, month, org=org)
        key = f"{prefix}{day}/{account}_CloudTrail_{region}_{year}{month}{day}T0000Z_{self.faker.lexify('????????????????')}.json.gz"

        s3 = boto3.client("s3", region_name=self.region)
        s3.put_object(Body=b'{"Records": []}', Bucket=bucket, Key=key)

        return Partition(account, region, year, month, StorageLocation(bucket, prefix))

    def write_many_logs(self, accounts, regions, periods, org=None, bucket=None):
        partitions = []
        for account in accounts:
            for region in regions:
                for year, month in periods:
                    partitions.append(self.write_log(account, region, year, month, org=org, bucket=bucket))
        return partitions

    def write_object(self, key, bucket=None):
        if not bucket:
            bucket = self.default_bucket

        s3 = boto3.client("s3", region_name=self.region)
        s3.put_object(Body=b"", Bucket=bucket, Key=key)
