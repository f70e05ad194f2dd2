import logging
import botocore
from .utils import ListingError, paginated_response

logger = logging.getLogger(__name__)

DELIMITER = "/"


class PathLister(object):
    """PathLister returns the "directories" directly below an S3 prefix.

    S3 has no directories, but listing with a delimiter groups keys into
    common prefixes. Those are stripped back down to bare segment names, so
    listing `AWSLogs/` in a bucket holding `AWSLogs/o-abc123/...` returns
    `["o-abc123"]`.
    """

    def __init__(self, s3, bucket, page_size=50):
        self.s3 = s3
        self.bucket = bucket
        self.page_size = page_size

    def list_children(self, prefix):
        args = {
            "Bucket": self.bucket,
            "Prefix": prefix,
            "Delimiter": DELIMITER,
            "MaxKeys": self.page_size,
        }

        try:
            common_prefixes = paginated_response(
                self.s3.list_objects_v2, args, "CommonPrefixes",
                token_arg="ContinuationToken",
                token_key="NextContinuationToken")
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
            raise ListingError(
                message=f"Could not list s3://{self.bucket}/{prefix}: {e}",
                source=e)

        prefix_len = len(prefix)
        names = [obj["Prefix"][prefix_len:-len(DELIMITER)] for obj in common_prefixes]
        logger.debug("s3://%s/%s: %d children", self.bucket, prefix, len(names))
        return names
