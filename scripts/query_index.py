import argparse
import asyncio
import os
import sys

# Ensure src is in pythonpath
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from dotenv import load_dotenv
load_dotenv()

from blog_search.config import settings
from blog_search.search.controller import SearchController
from blog_search.search.view import ResultsView
from blog_search.site.config_loader import load_site_config
from blog_search.site.index_client import SearchIndexClient, load_index_file


class LocalIndexFile:
    """Index source reading a built site's public/index.json."""

    def __init__(self, path):
        self.path = path

    async def fetch(self):
        return load_index_file(self.path)


async def main():
    parser = argparse.ArgumentParser(description="Run one query against the blog's search index.")
    parser.add_argument("query")
    parser.add_argument("--index", help="Local index.json (default: fetch from the configured site)")
    parser.add_argument("--site-config", default=settings.site_config_path, help="hugo.toml with [params.fuseOpts]")
    args = parser.parse_args()

    options = None
    if args.site_config:
        options = load_site_config(args.site_config).fuse_options

    if args.index:
        source = LocalIndexFile(args.index)
        print(f"Reading index from {args.index}...")
    else:
        source = SearchIndexClient()
        print(f"Fetching index from {source.index_url}...")

    controller = SearchController(
        source=source,
        view=ResultsView(settings.results_element_id),
        options=options,
        short_query_length=settings.short_query_length,
    )

    init = await controller.initialize()
    if not init.ok:
        print(f"Search unavailable: {init.error}")
        sys.exit(1)
    print(f"Loaded {init.record_count} records.")

    results = controller.on_input(args.query)
    if not results:
        if len(args.query) <= settings.short_query_length:
            print("Query too short.")
        else:
            print("No results found.")
        return

    for i, hit in enumerate(results, start=1):
        print(f"{i:>3}. {hit.score:.4f}  {hit.record.title or ''}  {hit.record.permalink}")

if __name__ == "__main__":
    asyncio.run(main())
