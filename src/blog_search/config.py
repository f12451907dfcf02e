from typing import Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    site_base_url: AnyHttpUrl = "http://backendbyte.com"
    index_path: str = "/index.json"

    # None means wait for the index indefinitely
    index_fetch_timeout: Optional[float] = Field(default=None, gt=0)

    # Optional hugo.toml; supplies baseURL and [params.fuseOpts]
    site_config_path: Optional[str] = None

    # Queries this long or shorter clear the results instead of searching
    short_query_length: int = Field(default=2, ge=0)

    # Page-level choice: tell users when the index failed to load
    show_unavailable_notice: bool = False

    results_element_id: str = "searchResults"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

    @property
    def index_url(self) -> str:
        return str(self.site_base_url).rstrip("/") + "/" + self.index_path.lstrip("/")

settings = Settings()
