"""Plain-text extraction from blip content."""

from wavesearch.model.document import LINE, BlipData, Characters, ElementStart


def extract_text(blip: BlipData) -> str:
    """Concatenate the visible text of a blip.

    Character runs are copied verbatim and each line element contributes a
    newline. Deletions, attribute changes, annotations and other elements
    carry no text.

    Args:
        blip: Blip whose content is traversed.

    Returns:
        Extracted text, empty if the blip has no visible characters or lines.
    """
    parts: list[str] = []
    for component in blip.content:
        if isinstance(component, Characters):
            parts.append(component.text)
        elif isinstance(component, ElementStart) and component.type == LINE:
            parts.append("\n")
    return "".join(parts)
