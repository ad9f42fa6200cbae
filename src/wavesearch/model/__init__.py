"""Wave data model: identities, documents, wavelets and wave views."""

from wavesearch.model.document import (
    AnnotationBoundary,
    BlipData,
    Characters,
    DeleteCharacters,
    DeleteElementEnd,
    DeleteElementStart,
    DocComponent,
    ElementEnd,
    ElementStart,
    ReplaceAttributes,
    Retain,
    UpdateAttributes,
)
from wavesearch.model.ids import WaveletName, shared_domain_participant
from wavesearch.model.wavelet import WaveletData, WaveViewData

__all__ = [
    "AnnotationBoundary",
    "BlipData",
    "Characters",
    "DeleteCharacters",
    "DeleteElementEnd",
    "DeleteElementStart",
    "DocComponent",
    "ElementEnd",
    "ElementStart",
    "ReplaceAttributes",
    "Retain",
    "UpdateAttributes",
    "WaveViewData",
    "WaveletData",
    "WaveletName",
    "shared_domain_participant",
]
