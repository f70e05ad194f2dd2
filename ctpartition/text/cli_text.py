description = """
Register CloudTrail logs as partitions of an Athena table.

The partitioner expects an organization trail's layout in the CloudTrail bucket:
    s3://<bucket>/AWSLogs/<org-id>/<account>/CloudTrail/<region>/<year>/<month>/...

It creates the table (if it doesn't exist yet) pointing at the organization's
prefix, then adds a partition for every account, region, year and month it
finds, using as few ALTER TABLE statements as Athena's query size limit allows.

For example, logs stored at
    s3://trail-bucket/AWSLogs/o-abc123/111122223333/CloudTrail/us-east-1/2023/01/

will create the partition
    (account='111122223333', region='us-east-1', year='2023', month='01')

Searching every year and month of every account can take a while. Use --year
and/or --month to only add those, or --current-month for this month.
"""


epilog = """
Queries are started in Athena and not waited on. Check the Athena console or
the results location for their outcome.
"""
