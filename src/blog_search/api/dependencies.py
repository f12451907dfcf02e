from typing import Optional

from fastapi import Request

from ..config import Settings, settings
from ..search.controller import SearchController
from ..search.view import ResultsView
from ..site.config_loader import load_site_config
from ..site.index_client import SearchIndexClient


def build_search_controller(app_settings: Optional[Settings] = None) -> SearchController:
    """
    Assemble a controller from settings and, when configured, hugo.toml.

    An explicitly configured `site_base_url` wins over the site's baseURL;
    `[params.fuseOpts]` replaces the default matcher options wholesale.
    """
    s = app_settings or settings

    index_url = s.index_url
    options = None

    if s.site_config_path:
        site = load_site_config(s.site_config_path)
        site.require_json_output()
        options = site.fuse_options

        if site.base_url and "site_base_url" not in s.model_fields_set:
            index_url = site.base_url.rstrip("/") + "/" + s.index_path.lstrip("/")

    return SearchController(
        source=SearchIndexClient(index_url=index_url, timeout=s.index_fetch_timeout),
        view=ResultsView(s.results_element_id),
        options=options,
        short_query_length=s.short_query_length,
    )


def get_search_controller(request: Request) -> SearchController:
    return request.app.state.search_controller
