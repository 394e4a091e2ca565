"""Loading, decoding and encoding of OpenAPI documents.

Typical pipeline::

    document = load_document("openapi.yaml")
    print(to_json(document))
"""

from oaspec.parser.codec import (
    decode,
    encode,
    from_json,
    from_yaml,
    load_document,
    to_json,
    to_yaml,
)
from oaspec.parser.loader import load_raw, parse_text

__all__ = [
    "decode",
    "encode",
    "from_json",
    "from_yaml",
    "load_document",
    "load_raw",
    "parse_text",
    "to_json",
    "to_yaml",
]
