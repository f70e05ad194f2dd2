import logging
import botocore
from .utils import SubmissionError

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "Default"


class QueryExecutor(object):
    """Submit statements to Athena.

    Queries are started and left to run; nothing here waits on them.
    """

    def __init__(self, athena, output_location, database=DEFAULT_DATABASE):
        self.athena = athena
        self.database = database

        if not output_location.startswith("s3://"):
            output_location = "s3://" + output_location
        self.output_location = output_location

    def submit(self, sql):
        try:
            resp = self.athena.start_query_execution(
                QueryString=sql,
                QueryExecutionContext={"Database": self.database},
                ResultConfiguration={"OutputLocation": self.output_location})
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
            raise SubmissionError(
                message=f"Could not start Athena query: {e}",
                source=e)

        execution_id = resp.get("QueryExecutionId")
        logger.debug("started query %s (%d characters)", execution_id, len(sql))
        return execution_id
