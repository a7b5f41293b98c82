"""Pydantic model for the section context surrounding a table."""

from pydantic import BaseModel, Field

from html_tables.text.schema import RichText


class ContentHierarchy(BaseModel):
    """One heading level of the breadcrumb leading to a target element.

    ``level`` 0 is the document itself and has an empty heading; level *n*
    comes from an ``h<n>`` heading.  ``content_before``/``content_after`` hold
    the blocks of that section found before/after the target, in document order.
    """

    level: int
    heading: RichText = Field(default_factory=RichText.empty)
    content_before: list[RichText] = Field(default_factory=list)
    content_after: list[RichText] = Field(default_factory=list)
