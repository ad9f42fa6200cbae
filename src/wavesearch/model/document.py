"""Structured document content as a sequence of operation components.

A blip's content is held in the same form it is initialised with: an
ordered list of components, each tagged by ``kind``. Only a small subset
(characters and element starts) carry visible text.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

LINE = "line"


class Characters(BaseModel):
    kind: Literal["characters"] = "characters"
    text: str


class ElementStart(BaseModel):
    kind: Literal["element_start"] = "element_start"
    type: str
    attributes: dict[str, str] = Field(default_factory=dict)


class ElementEnd(BaseModel):
    kind: Literal["element_end"] = "element_end"


class Retain(BaseModel):
    kind: Literal["retain"] = "retain"
    item_count: int


class DeleteCharacters(BaseModel):
    kind: Literal["delete_characters"] = "delete_characters"
    text: str


class DeleteElementStart(BaseModel):
    kind: Literal["delete_element_start"] = "delete_element_start"
    type: str
    attributes: dict[str, str] = Field(default_factory=dict)


class DeleteElementEnd(BaseModel):
    kind: Literal["delete_element_end"] = "delete_element_end"


class ReplaceAttributes(BaseModel):
    kind: Literal["replace_attributes"] = "replace_attributes"
    old_attributes: dict[str, str] = Field(default_factory=dict)
    new_attributes: dict[str, str] = Field(default_factory=dict)


class UpdateAttributes(BaseModel):
    kind: Literal["update_attributes"] = "update_attributes"
    updates: dict[str, tuple[str | None, str | None]] = Field(default_factory=dict)


class AnnotationBoundary(BaseModel):
    kind: Literal["annotation_boundary"] = "annotation_boundary"
    ends: list[str] = Field(default_factory=list)
    changes: dict[str, tuple[str | None, str | None]] = Field(default_factory=dict)


DocComponent = Annotated[
    Union[
        Characters,
        ElementStart,
        ElementEnd,
        Retain,
        DeleteCharacters,
        DeleteElementStart,
        DeleteElementEnd,
        ReplaceAttributes,
        UpdateAttributes,
        AnnotationBoundary,
    ],
    Field(discriminator="kind"),
]


class BlipData(BaseModel):
    """A single document (blip) inside a wavelet.

    Attributes:
        author: Address of the participant who created the blip.
        last_modified_time: Milliseconds since epoch of the last edit.
        content: Document content as initialisation components.
    """

    author: str = ""
    last_modified_time: int = 0
    content: list[DocComponent] = Field(default_factory=list)
