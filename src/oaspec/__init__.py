"""oaspec -- a typed OpenAPI 3.1 document model with a structural validator.

Documents decode from JSON or YAML into pydantic models, keep every ``x-``
extension, and encode back to an equal tree. The validator walks the typed
document, follows ``#/components/...`` references, and reports every
problem it finds with the path it was found at.

Typical use::

    from oaspec.parser import load_document
    from oaspec.validation import validate_document

    document = load_document("openapi.yaml")
    for issue in validate_document(document):
        print(issue)

Modules:
    spec: The typed object model (envelopes, reference cells, schemas).
    parser: Loading, decoding and encoding.
    validation: The validator and its options.
    app: Typer application and CLI entry point.
    config: XDG-aware configuration and option precedence.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
