"""
Closed vocabulary of column transformers understood by the
ingest pipeline. Unknown names are passed through opaquely.
"""

VARCHAR = "varchar"
INT = "int"
BIGINT = "bigint"
FLOAT = "float"
BOOL = "bool"
UNIX_TIMESTAMP = "f@timestamp@unix"
UNIX_TIMESTAMP_UTC = "f@timestamp@unix-utc"
IP_CITY = "ipCity"
IP_COUNTRY = "ipCountry"
IP_REGION = "ipRegion"
IP_ASN = "ipAsn"
IP_ASN_INTEGER = "ipAsnInteger"

VARCHAR_MIN_SIZE = 1
VARCHAR_MAX_SIZE = 65535


def get_transformer_names():
    """
    Known transformer names, as served by the type catalog.
    """
    return [
        VARCHAR,
        INT,
        BIGINT,
        FLOAT,
        BOOL,
        UNIX_TIMESTAMP,
        UNIX_TIMESTAMP_UTC,
        IP_CITY,
        IP_COUNTRY,
        IP_REGION,
        IP_ASN,
        IP_ASN_INTEGER,
    ]
