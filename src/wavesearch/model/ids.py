"""Wave and wavelet identities."""

from pydantic import BaseModel, ConfigDict


class WaveletName(BaseModel):
    """Stable identity of a wavelet within a wave.

    Attributes:
        wave_id: Serialised id of the owning wave (e.g. "example.com!w+abc").
        wavelet_id: Serialised id of the wavelet (e.g. "example.com!conv+root").
    """

    model_config = ConfigDict(frozen=True)

    wave_id: str
    wavelet_id: str

    @classmethod
    def of(cls, wave_id: str, wavelet_id: str) -> "WaveletName":
        """Build a wavelet name from its two id components."""
        return cls(wave_id=wave_id, wavelet_id=wavelet_id)

    def __str__(self) -> str:
        return f"{self.wave_id}/{self.wavelet_id}"


def shared_domain_participant(domain: str) -> str:
    """Address of the broadcast participant for a wave domain.

    Args:
        domain: Wave server domain, e.g. "example.com".

    Returns:
        Participant address with an empty local part ("@example.com").
    """
    return f"@{domain}"
