from typing import List

from blueprint.canonical.column import ColumnSpec
from blueprint.standards import transformers


SORT_KEY_MARKER = " sortkey"


def get_bootstrap_columns() -> List[ColumnSpec]:
    """
    Mandatory columns present in every newly created event table.
    A fresh list is returned on each call so drafts never share columns.
    """
    return [
        ColumnSpec(
            inbound_name="time",
            outbound_name="time",
            transformer=transformers.UNIX_TIMESTAMP,
            column_creation_options=SORT_KEY_MARKER,
        ),
        ColumnSpec(
            inbound_name="ip",
            outbound_name="ip",
            transformer=transformers.VARCHAR,
            size=15,
        ),
        ColumnSpec(
            inbound_name="ip",
            outbound_name="city",
            transformer=transformers.IP_CITY,
        ),
        ColumnSpec(
            inbound_name="ip",
            outbound_name="country",
            transformer=transformers.IP_COUNTRY,
        ),
        ColumnSpec(
            inbound_name="ip",
            outbound_name="region",
            transformer=transformers.IP_REGION,
        ),
        ColumnSpec(
            inbound_name="ip",
            outbound_name="asn_id",
            transformer=transformers.IP_ASN_INTEGER,
        ),
    ]
