"""
Field-specific overrides applied to normalized suggestions.

Adding an override is a data change: append a RewriteRule.
"""

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class RewriteRule:
    name: str                               # inbound name to match
    changes: Tuple[Tuple[str, Any], ...]    # (ColumnSpec attribute, value), applied in order


REWRITE_RULES: Tuple[RewriteRule, ...] = (
    RewriteRule("channel", (("size", 25),)),
    RewriteRule("device_id", (("size", 32),)),
    RewriteRule("url", (("size", 255),)),
    RewriteRule("referrer_url", (("size", 255),)),
    RewriteRule("domain", (("size", 255),)),
    RewriteRule("host", (("size", 127),)),
    RewriteRule("referrer_domain", (("size", 255),)),
    RewriteRule("referrer_host", (("size", 127),)),
    RewriteRule("received_language", (("size", 8),)),
    RewriteRule("preferred_language", (("size", 8),)),
)

# Inbound names never persisted
DELETED_INBOUND_NAMES: Tuple[str, ...] = (
    "token",
)

# Inbound name that selects the table's distribution key
DIST_KEY_INBOUND_NAME = "device_id"
