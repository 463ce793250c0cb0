"""Physical key layout: one list per table, one hash per record."""

SEPARATOR = ":"


def record_key(table: str, pk: object) -> str:
    """``dogs`` + ``1`` -> ``dogs:1``."""
    return SEPARATOR.join([table, str(pk)])


def index_key(table: str) -> str:
    return table
