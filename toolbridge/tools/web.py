"""
Web search tool.

Performs live internet searches against a configurable search API
endpoint and returns a concise text summary of the top results. The
HTTP request uses the `requests` library and runs in a worker thread.
"""

import asyncio
import logging
import os
from typing import Any, Dict, List, Optional

import requests

from toolbridge.tools.base import Declaration, Tool, ToolExecutionError

logger = logging.getLogger(__name__)


class WebSearchTool(Tool):
    """
    Perform live internet searches using a configurable search API.

    The search API should accept query parameters such as `q` and
    optionally `num_results`. API authentication can be provided
    via the SEARCH_API_KEY environment variable.

    Tool input schema:
    {
        "query": "search query string",
        "num_results": 5
    }
    """

    def __init__(self, endpoint: Optional[str], timeout: int = 15) -> None:
        self.endpoint = endpoint
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "WebSearchTool":
        endpoint = cfg.get("endpoint") or os.getenv("SEARCH_API_ENDPOINT", "")
        return cls(endpoint=endpoint or None, timeout=int(cfg.get("timeout", 15)))

    def describe(self) -> Declaration:
        return {
            "name": "web_search",
            "description": (
                "Perform a live web search and return a concise text summary "
                "of the top results."
            ),
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "The search query."},
                    "num_results": {
                        "type": "integer",
                        "description": "How many results to return (default 5).",
                    },
                },
                "required": ["query"],
            },
        }

    async def execute(self, args: Dict[str, Any]) -> str:
        query = args.get("query", "")
        if not query:
            raise ToolExecutionError("WebSearchTool: 'query' is required.")
        try:
            num_results = int(args.get("num_results", 5))
        except (TypeError, ValueError) as exc:
            raise ToolExecutionError("WebSearchTool: 'num_results' must be an integer.") from exc
        if not self.endpoint:
            raise ToolExecutionError(
                "WebSearchTool requires SEARCH_API_ENDPOINT env var or tools.web_search.endpoint in config."
            )
        data = await asyncio.to_thread(self._search, query, num_results)
        return self._summarize(query, data, num_results)

    def _search(self, query: str, num_results: int) -> Any:
        headers: Dict[str, str] = {}
        api_key = os.getenv("SEARCH_API_KEY", "")
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        payload = {
            "q": query,
            "num_results": num_results,
        }
        try:
            resp = requests.get(
                self.endpoint,
                params=payload,
                headers=headers,
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise ToolExecutionError(
                f"WebSearchTool encountered an error while calling the search API: {exc}"
            ) from exc
        try:
            return resp.json()
        except ValueError:
            return resp.text[:4000]

    @staticmethod
    def _summarize(query: str, data: Any, num_results: int) -> str:
        if not isinstance(data, dict):
            return str(data)
        results = data.get("results") or data.get("data") or []
        lines: List[str] = [f"Search results for: {query}"]
        for idx, r in enumerate(results[:num_results], start=1):
            title = r.get("title") or r.get("name") or "Untitled"
            snippet = r.get("snippet") or r.get("description") or ""
            url = r.get("url") or r.get("link") or ""
            lines.append(f"{idx}. {title}")
            if snippet:
                lines.append(f"   {snippet}")
            if url:
                lines.append(f"   URL: {url}")
        logger.info("Web search for %r returned %d results", query, len(results))
        return "\n".join(lines)
