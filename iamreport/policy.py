"""
Policy document decoding.

IAM returns policy documents as URL-encoded JSON text. botocore usually
decodes them into a mapping before they reach us, so both forms are accepted.
"""

import json
import re
from collections.abc import Mapping
from urllib.parse import unquote_plus

from .errors import DecodeError
from .types import PolicyDocument

# A '%' that does not start a two-digit hex escape
_INVALID_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_policy_document(document: PolicyDocument) -> str:
    """
    Turn a policy document into printable JSON text.

    Text documents are query-unescaped: '+' becomes a space and %XX escapes
    are decoded as UTF-8, with undecodable bytes shown as U+FFFD. Mapping
    documents are pretty-printed.

    Args:
        document: URL-encoded JSON text or a decoded mapping

    Returns:
        The decoded document text

    Raises:
        DecodeError: If the text has a malformed escape
    """
    if isinstance(document, Mapping):
        return json.dumps(document, indent=4)

    match = _INVALID_ESCAPE_PATTERN.search(document)
    if match:
        bad = document[match.start():match.start() + 3]
        raise DecodeError(f"invalid URL escape {bad!r}")

    return unquote_plus(document, errors="replace")
