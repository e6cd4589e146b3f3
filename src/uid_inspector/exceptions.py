"""Inspector exceptions."""


class UidInspectorError(Exception):
    """Base class for errors raised inside uid_inspector."""


class UnknownIdentityError(UidInspectorError):
    """Raised when an operation references an element identity that is no longer tracked."""

    def __init__(self, identity: int):
        super().__init__(f"Unknown element identity: {identity}")
        self.identity = identity


class InvalidElementStateError(UidInspectorError):
    """Raised when a tracked identity's visual handle is no longer valid."""

    def __init__(self, identity: int, page_index: int):
        super().__init__(f"Element {identity} at index {page_index} has no valid visual handle")
        self.identity = identity
        self.page_index = page_index
