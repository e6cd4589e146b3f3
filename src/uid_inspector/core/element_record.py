"""Value-holding leaf for one array element."""

from dataclasses import dataclass


@dataclass
class ElementRecord:
    """
    One element of an edited UID array.

    Attributes:
        identity: Opaque handle allocated by the element factory, unique for
            the lifetime of the visual element.
        value: Identifier text. May be empty or malformed; validity belongs to
            the resolver, not to the record.
        page_index: Position within the full (unpaged) sequence.
    """
    identity: int
    value: str = ""
    page_index: int = 0
