from unittest import TestCase
from unittest.mock import MagicMock
from botocore.exceptions import ClientError
from moto import mock_aws
import boto3
import sure  # noqa: F401

from ctpartition import QueryExecutor, SubmissionError


class QueryExecutorTest(TestCase):
    region = "us-east-1"

    def test_output_location(self):
        QueryExecutor(MagicMock(), "results-bucket/athena/").output_location.should.equal(
            "s3://results-bucket/athena/")
        QueryExecutor(MagicMock(), "s3://results-bucket/athena/").output_location.should.equal(
            "s3://results-bucket/athena/")

    def test_submit(self):
        athena = MagicMock()
        athena.start_query_execution.return_value = {"QueryExecutionId": "abc-123"}

        executor = QueryExecutor(athena, "results-bucket", database="cloudtrail")

        executor.submit("SELECT 1").should.equal("abc-123")
        athena.start_query_execution.assert_called_once_with(
            QueryString="SELECT 1",
            QueryExecutionContext={"Database": "cloudtrail"},
            ResultConfiguration={"OutputLocation": "s3://results-bucket"})

    def test_submit_default_database(self):
        athena = MagicMock()
        executor = QueryExecutor(athena, "results-bucket")

        executor.submit("SELECT 1")

        _, kwargs = athena.start_query_execution.call_args
        kwargs["QueryExecutionContext"].should.equal({"Database": "Default"})

    def test_submit_failure(self):
        athena = MagicMock()
        athena.start_query_execution.side_effect = ClientError(
            {"Error": {"Code": "InvalidRequestException", "Message": "line 1:1: mismatched input"}},
            "StartQueryExecution")

        executor = QueryExecutor(athena, "results-bucket")

        with self.assertRaises(SubmissionError) as context:
            executor.submit("SELEC 1")

        exception = context.exception
        exception.error_type.should.equal("SubmissionError")
        exception.source.should.be.a(ClientError)
        exception.message.should.contain("InvalidRequestException")

    @mock_aws
    def test_submit_to_athena(self):
        athena = boto3.client("athena", region_name=self.region)
        executor = QueryExecutor(athena, "results-bucket/athena/")

        execution_id = executor.submit("SELECT 1")

        resp = athena.get_query_execution(QueryExecutionId=execution_id)
        resp["QueryExecution"]["Query"].should.equal("SELECT 1")
        resp["QueryExecution"]["ResultConfiguration"]["OutputLocation"].should.match(
            r"^s3://results-bucket/athena/")
