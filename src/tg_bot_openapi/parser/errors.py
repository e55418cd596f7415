"""Fatal parser errors.

Each one means the documentation changed in a way the heuristics can no
longer interpret, so the whole run stops instead of emitting a wrong schema.
"""


class DocumentParseError(Exception):
    """Base class for every fatal parsing error."""


class ContentContainerNotFoundError(DocumentParseError):
    def __init__(self, container_id: str):
        super().__init__(f"Content container #{container_id} not found")
        self.container_id = container_id


class AnchorNotFoundError(DocumentParseError):
    def __init__(self, anchor: str):
        super().__init__(f"Section heading h3 {anchor!r} not found")
        self.anchor = anchor


class EmptyTypeError(DocumentParseError):
    def __init__(self):
        super().__init__("Empty type string")


class InvalidArrayElementError(DocumentParseError):
    def __init__(self, element: str, raw: str):
        super().__init__(f"Invalid array element type {element!r} in type string {raw!r}")
        self.element = element
        self.raw = raw


class ReturnTypeExtractionError(DocumentParseError):
    def __init__(self, description: str, limit: int = 200):
        self.excerpt = description[:limit]
        super().__init__(f"Failed to extract return type from description: {self.excerpt}")


class VersionNotFoundError(DocumentParseError):
    def __init__(self):
        super().__init__("Failed to extract Bot API version from document")
