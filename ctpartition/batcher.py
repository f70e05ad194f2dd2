from .utils import StatementTooLarge

# Athena rejects query strings longer than this
MAX_SQL_LENGTH = 262144

DEFAULT_TABLE = "cloudtrail_logs"


class StatementBatcher(object):
    """StatementBatcher packs partition clauses into ALTER TABLE statements.

    Athena caps the size of a query string, so registering thousands of
    partitions means splitting them across several statements:

        ALTER TABLE cloudtrail_logs ADD IF NOT EXISTS PARTITION (...) LOCATION '...' PARTITION (...) ...

    Clauses are packed greedily in the order they arrive. A statement is
    finished as soon as the next clause won't fit, and the last statement is
    always produced, even when it holds no clauses at all.
    """

    def __init__(self, table=DEFAULT_TABLE, budget=MAX_SQL_LENGTH):
        self.table = table
        self.budget = budget
        self.header = f"ALTER TABLE {table} ADD IF NOT EXISTS"
        self.clause_count = 0

        if self.capacity <= 0:
            raise ValueError(f"budget of {budget} leaves no room after '{self.header}'")

    @property
    def capacity(self):
        return self.budget - len(self.header)

    @staticmethod
    def render(partition):
        return (
            f" PARTITION (account='{partition.account}', region='{partition.region}', "
            f"year='{partition.year}', month='{partition.month}') "
            f"LOCATION '{partition.location.uri}'")

    def statements(self, partitions):
        return self.batch(self.render(p) for p in partitions)

    def batch(self, clauses):
        """Yield complete statements built from `clauses`.

        Args:
            clauses (iterable of str): rendered clauses, each with its leading space

        Raises:
            StatementTooLarge: a clause is longer than an empty statement can hold,
                raised after the statement before it has been yielded
        """

        parts = [self.header]
        remaining = self.capacity
        self.clause_count = 0

        for clause in clauses:
            clause_len = len(clause)

            if remaining < clause_len and len(parts) > 1:
                yield "".join(parts)
                parts = [self.header]
                remaining = self.capacity

            if clause_len > self.capacity:
                raise StatementTooLarge(
                    f"partition clause of {clause_len} characters can't fit in a {self.budget} character statement: {clause.strip()}")

            parts.append(clause)
            remaining -= clause_len
            self.clause_count += 1

        yield "".join(parts)
