"""Text extraction tests."""

from wavesearch.model import (
    AnnotationBoundary,
    BlipData,
    Characters,
    DeleteCharacters,
    DeleteElementEnd,
    DeleteElementStart,
    ElementEnd,
    ElementStart,
    ReplaceAttributes,
    Retain,
    UpdateAttributes,
)
from wavesearch.search.text import extract_text


def test_characters_and_lines() -> None:
    """Line elements become newlines and characters are kept verbatim."""
    doc = BlipData(
        content=[
            ElementStart(type="body"),
            ElementStart(type="line"),
            ElementEnd(),
            Characters(text="first  line"),
            ElementStart(type="line", attributes={"t": "h1"}),
            ElementEnd(),
            Characters(text="second"),
            ElementEnd(),
        ]
    )
    assert extract_text(doc) == "\nfirst  line\nsecond"


def test_non_text_components_ignored() -> None:
    """Deletions, attributes, annotations and other elements add nothing."""
    doc = BlipData(
        content=[
            AnnotationBoundary(changes={"style/fontWeight": (None, "bold")}),
            Characters(text="kept"),
            AnnotationBoundary(ends=["style/fontWeight"]),
            Retain(item_count=3),
            DeleteCharacters(text="gone"),
            DeleteElementStart(type="line"),
            DeleteElementEnd(),
            ReplaceAttributes(old_attributes={"a": "1"}, new_attributes={"a": "2"}),
            UpdateAttributes(updates={"a": ("1", None)}),
            ElementStart(type="image", attributes={"attachment": "x"}),
            ElementEnd(),
        ]
    )
    assert extract_text(doc) == "kept"


def test_empty_document() -> None:
    assert extract_text(BlipData()) == ""
    assert extract_text(BlipData(content=[ElementStart(type="body"), ElementEnd()])) == ""


def test_extraction_is_repeatable() -> None:
    doc = BlipData(content=[ElementStart(type="line"), ElementEnd(), Characters(text="x")])
    assert extract_text(doc) == extract_text(doc)
    assert len(doc.content) == 3


def test_content_parses_from_json() -> None:
    """Components are discriminated by their kind tag."""
    doc = BlipData.model_validate(
        {
            "content": [
                {"kind": "element_start", "type": "line"},
                {"kind": "element_end"},
                {"kind": "characters", "text": "hi"},
            ]
        }
    )
    assert extract_text(doc) == "\nhi"
