"""Condenses wave views into search results."""

from wavesearch.model.wavelet import WaveViewData
from wavesearch.search.indexer import RESERVED_DOCUMENTS
from wavesearch.search.schemas import SearchResult
from wavesearch.search.text import extract_text

SNIPPET_LENGTH = 140


def digest(view: WaveViewData) -> SearchResult:
    """Summarise a wave view as a search result.

    The title is the first line of the first blip with text; the snippet is
    the remaining text of that blip, whitespace-collapsed and truncated.
    """
    participants: dict[str, None] = {}
    title = ""
    snippet = ""
    blip_count = 0
    creator = ""
    last_modified = 0

    for wavelet in view.wavelets.values():
        creator = creator or wavelet.creator
        last_modified = max(last_modified, wavelet.last_modified_time)
        participants.update(dict.fromkeys(wavelet.participants))
        for doc_name, blip in wavelet.documents.items():
            if doc_name in RESERVED_DOCUMENTS:
                continue
            text = extract_text(blip).strip()
            if not text:
                continue
            blip_count += 1
            if not title:
                first, _, rest = text.partition("\n")
                title = first.strip()
                snippet = " ".join(rest.split())[:SNIPPET_LENGTH]

    return SearchResult(
        wave_id=view.wave_id,
        title=title,
        snippet=snippet,
        participants=list(participants),
        creator=creator,
        last_modified_time=last_modified,
        blip_count=blip_count,
        wavelet_ids=list(view.wavelets),
    )
