"""Index records, backend field names and search API responses."""

from pydantic import BaseModel, Field

ID = "id"
WAVE_ID = "waveId_s"
WAVELET_ID = "waveletId_s"
DOC_NAME = "docName_s"
LMT = "lmt_l"
WITH = "with_ss"
WITH_FUZZY = "with_txt"
CREATOR = "creator_t"
TEXT = "text_t"
IN = "in_ss"

INBOX = "inbox"


def record_id(wave_id: str, doc_name: str) -> str:
    """Backend document id of a blip."""
    return f"{wave_id}/~/conv+root/{doc_name}"


class IndexRecord(BaseModel):
    """One indexable blip as sent to the backend.

    Attributes:
        record_id: Unique backend id derived from wave id and document name.
        wave_id: Owning wave.
        wavelet_id: Owning wavelet.
        doc_name: Document (blip) name inside the wavelet.
        last_modified_time: Wavelet last-modified time in milliseconds.
        creator: Wavelet creator address.
        participants: Wavelet participant addresses.
        text: Plain text extracted from the blip.
        folder: Folder tag the blip is filed under.
    """

    record_id: str
    wave_id: str
    wavelet_id: str
    doc_name: str
    last_modified_time: int
    creator: str
    participants: list[str]
    text: str
    folder: str = INBOX

    def to_solr_document(self) -> dict[str, object]:
        """Map the record onto backend field names."""
        return {
            ID: self.record_id,
            WAVE_ID: self.wave_id,
            WAVELET_ID: self.wavelet_id,
            DOC_NAME: self.doc_name,
            LMT: self.last_modified_time,
            WITH: list(self.participants),
            WITH_FUZZY: list(self.participants),
            CREATOR: self.creator,
            TEXT: self.text,
            IN: self.folder,
        }


class SearchResult(BaseModel):
    """Digest of one matching wave.

    Attributes:
        wave_id: Id of the matching wave.
        title: First line of the wave's first non-empty blip.
        snippet: Text following the title, truncated.
        participants: Union of participants across matching wavelets.
        creator: Creator of the first matching wavelet.
        last_modified_time: Latest modification across matching wavelets.
        blip_count: Number of non-reserved blips in matching wavelets.
        wavelet_ids: Matching wavelets in discovery order.
    """

    wave_id: str
    title: str
    snippet: str
    participants: list[str]
    creator: str
    last_modified_time: int
    blip_count: int
    wavelet_ids: list[str]


class SearchResponse(BaseModel):
    """Search response envelope.

    Attributes:
        query: The original search query string.
        results: Matched waves in discovery order.
        total: Number of results returned.
        limit: Maximum results requested.
        offset: Backend offset the search started at.
        failed: True when the backend could not be queried.
    """

    query: str
    results: list[SearchResult] = Field(default_factory=list)
    total: int = 0
    limit: int
    offset: int
    failed: bool = False


class RebuildReport(BaseModel):
    """Outcome of a full index rebuild.

    Attributes:
        cleared: Whether the delete-all and commit both succeeded.
        wavelets: Number of wavelets scheduled for indexing.
        failed: Number of wavelets whose indexing task failed.
    """

    cleared: bool
    wavelets: int
    failed: int
