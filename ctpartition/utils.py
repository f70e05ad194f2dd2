class PartitionerError(Exception):
    def __init__(self, error_type=None, message=None, source=None):
        self.error_type = error_type
        self.source = source
        self.message = message
        super().__init__(message)


class ConfigurationError(PartitionerError):
    def __init__(self, message, error_type="Configuration", source=None):
        super().__init__(error_type=error_type, message=message, source=source)


class OrgNotFound(PartitionerError):
    def __init__(self, message, source=None):
        super().__init__(error_type="OrgNotFound", message=message, source=source)


class ListingError(PartitionerError):
    def __init__(self, message, source=None):
        super().__init__(error_type="ListingError", message=message, source=source)


class SubmissionError(PartitionerError):
    def __init__(self, message, source=None):
        super().__init__(error_type="SubmissionError", message=message, source=source)


class StatementTooLarge(PartitionerError):
    def __init__(self, message, source=None):
        super().__init__(error_type="StatementTooLarge", message=message, source=source)


def paginated_response(function, args, container_name, token_arg="NextToken", token_key="NextToken"):
    items = []
    args = dict(args)
    next_token = None

    while True:
        if next_token:
            args[token_arg] = next_token
        resp = function(**args)
        next_token = resp.get(token_key, None)

        items.extend(resp.get(container_name, []))

        if not next_token:
            break

    return items
