"""
Hugo Site Configuration

Reads the parts of `hugo.toml` the search subsystem depends on:

- `baseURL`, to locate the generated index
- `[params.fuseOpts]`, the matcher options declared for the theme's search
- `[outputs].home`, which must include JSON or no index is generated
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import SiteConfigError
from ..search.models import MatchOptions

logger = logging.getLogger("search.site")


class SiteConfig(BaseModel):
    """
    Search-relevant subset of the Hugo site configuration.
    """

    base_url: Optional[str] = None
    fuse_options: Optional[MatchOptions] = None
    home_outputs: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def json_output_enabled(self) -> bool:
        return any(fmt.upper() == "JSON" for fmt in self.home_outputs)

    def require_json_output(self) -> None:
        if not self.json_output_enabled:
            raise SiteConfigError(
                'Site config does not enable JSON output for the home page; '
                'add "JSON" to [outputs].home so index.json is generated.'
            )


def load_site_config(path: str | Path) -> SiteConfig:
    """
    Parse a `hugo.toml` file.

    Raises
    ------
    SiteConfigError
        If the file is unreadable, not TOML, or has invalid fuseOpts.
    """
    path = Path(path)

    try:
        with path.open("rb") as f:
            raw = tomllib.load(f)
    except OSError as exc:
        raise SiteConfigError(f"Cannot read site config {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise SiteConfigError(f"Invalid TOML in site config {path}: {exc}") from exc

    params = raw.get("params") or {}
    fuse_raw = params.get("fuseOpts")

    fuse_options = None
    if fuse_raw is not None:
        try:
            fuse_options = MatchOptions.model_validate(fuse_raw)
        except ValidationError as exc:
            raise SiteConfigError(
                f"Invalid [params.fuseOpts] in {path}: {exc.error_count()} error(s)."
            ) from exc

    outputs = raw.get("outputs") or {}
    home_outputs = outputs.get("home") or []
    if isinstance(home_outputs, str):
        home_outputs = [home_outputs]

    config = SiteConfig(
        base_url=raw.get("baseURL"),
        fuse_options=fuse_options,
        home_outputs=[str(o) for o in home_outputs],
    )

    logger.info(
        "Loaded site config %s (json output: %s, fuseOpts: %s)",
        path,
        config.json_output_enabled,
        "yes" if fuse_options else "no",
    )
    return config
