"""Service configuration loaded from environment variables."""
from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wavesearch.model.ids import shared_domain_participant


class Settings(BaseSettings):
    """Service configuration loaded from environment variables.

    Attributes:
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug mode and API documentation.
        shutdown_timeout: Seconds to wait for graceful shutdown.
        key: API key for authenticating requests.
        solr_base_url: Base URL of the Solr core.
        solr_timeout: Per-request timeout for Solr calls, in seconds.
        min_page_size: Smallest page requested from Solr while searching.
        wave_domain: Domain served by this wave server.
        event_queue_size: Maximum size of each subscriber queue.
        event_max_subscribers: Maximum number of concurrent subscribers.
        rebuild_on_startup: Rebuild the whole index when the service starts.
    """

    model_config = SettingsConfigDict(
        env_prefix="WAVESEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    shutdown_timeout: float = 30.0
    key: str = ""

    solr_base_url: str = "http://localhost:8983/solr"
    solr_timeout: float = 10.0
    min_page_size: int = 10
    wave_domain: str = "example.com"

    event_queue_size: int = 1000
    event_max_subscribers: int = 100
    rebuild_on_startup: bool = False

    @computed_field
    @property
    def shared_participant(self) -> str:
        """Broadcast participant address of the wave domain.

        Returns:
            Address such as "@example.com".
        """
        return shared_domain_participant(self.wave_domain)
