"""Wavelet snapshots and aggregated wave views."""

from pydantic import BaseModel, Field

from wavesearch.model.document import BlipData
from wavesearch.model.ids import WaveletName


class WaveletData(BaseModel):
    """Readable snapshot of a wavelet at a given version.

    Attributes:
        wave_id: Owning wave id.
        wavelet_id: Wavelet id.
        creator: Address of the wavelet creator.
        participants: Participant addresses in join order.
        version: Version the snapshot reflects.
        last_modified_time: Milliseconds since epoch of the last change.
        documents: Blips keyed by document name, in creation order.
    """

    wave_id: str
    wavelet_id: str
    creator: str
    participants: list[str] = Field(default_factory=list)
    version: int = 0
    last_modified_time: int = 0
    documents: dict[str, BlipData] = Field(default_factory=dict)

    @property
    def name(self) -> WaveletName:
        return WaveletName.of(self.wave_id, self.wavelet_id)

    def document_ids(self) -> list[str]:
        return list(self.documents)

    def get_document(self, doc_name: str) -> BlipData | None:
        return self.documents.get(doc_name)


class WaveViewData(BaseModel):
    """A wave assembled from the wavelets that matched a search.

    Attributes:
        wave_id: Id of the wave.
        wavelets: Wavelet snapshots keyed by wavelet id, in merge order.
    """

    wave_id: str
    wavelets: dict[str, WaveletData] = Field(default_factory=dict)

    def add_wavelet(self, wavelet: WaveletData) -> None:
        """Merge a wavelet snapshot into the view.

        Raises:
            ValueError: If the wavelet belongs to another wave.
        """
        if wavelet.wave_id != self.wave_id:
            raise ValueError(
                f"wavelet {wavelet.name} does not belong to wave {self.wave_id}"
            )
        self.wavelets.setdefault(wavelet.wavelet_id, wavelet)
