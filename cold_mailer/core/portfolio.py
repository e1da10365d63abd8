"""
Portfolio Index - Read-only lookup of portfolio links by tech stack.

The dataset is a JSON list of objects such as:

    [{"Techstack": "React, Next.js, Tailwind", "Links": "https://..."}]

It is loaded once at startup and shared by every request.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional, Union
import json
import logging

from .models import PortfolioEntry


DEFAULT_PORTFOLIO_PATH = Path(__file__).resolve().parent.parent / "data" / "portfolio.json"

TAG_KEYS = ("Techstack", "techstack", "skill_tag", "tag")
LINK_KEYS = ("Links", "links", "Link", "link")


class PortfolioIndex:
    """Immutable, ordered collection of portfolio entries."""

    def __init__(self, entries: Iterable[PortfolioEntry] = ()):
        self._entries: tuple[PortfolioEntry, ...] = tuple(
            PortfolioEntry(skill_tag=e.skill_tag.strip().lower(), link=e.link)
            for e in entries
        )

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "PortfolioIndex":
        """
        Load the portfolio dataset from a JSON file.

        A missing or unreadable file produces an empty index so that link
        enrichment degrades to "no links found" instead of stopping the
        process.

        Args:
            path: Dataset location (default: bundled data/portfolio.json)

        Returns:
            PortfolioIndex with tags normalized to lowercase
        """
        logger = logging.getLogger(cls.__name__)
        data_path = Path(path) if path else DEFAULT_PORTFOLIO_PATH

        try:
            with open(data_path, 'r', encoding='utf-8') as f:
                items = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading portfolio data from {data_path}: {e}")
            return cls()

        if not isinstance(items, list):
            logger.error(f"Portfolio data in {data_path} is not a list, ignoring it")
            return cls()

        entries = []
        for position, item in enumerate(items):
            entry = cls._parse_item(item)
            if entry is None:
                logger.warning(f"Skipping malformed portfolio item #{position}: {item!r}")
                continue
            entries.append(entry)

        logger.info(f"Loaded {len(entries)} portfolio entries from {data_path}")
        return cls(entries)

    @staticmethod
    def _parse_item(item) -> Optional[PortfolioEntry]:
        if not isinstance(item, dict):
            return None

        tag = next((item[k] for k in TAG_KEYS if isinstance(item.get(k), str)), "")
        link = next((item[k] for k in LINK_KEYS if isinstance(item.get(k), str)), "")

        if not tag.strip() or not link.strip():
            return None

        return PortfolioEntry(skill_tag=tag.strip().lower(), link=link.strip())

    def lookup(self, skill_tag_lower: str) -> list[str]:
        """
        Find links whose tag and the query overlap.

        Containment is checked both ways, so "react" finds the
        "react, next.js" entry and the tag "node" is found by "node.js
        developer". Results keep dataset order and may repeat a link that
        is listed under several tags.
        """
        query = (skill_tag_lower or "").strip().lower()
        if not query:
            return []

        return [
            entry.link
            for entry in self._entries
            if query in entry.skill_tag or entry.skill_tag in query
        ]

    @property
    def entries(self) -> tuple[PortfolioEntry, ...]:
        return self._entries

    def links(self) -> list[str]:
        """All distinct links in dataset order."""
        seen = []
        for entry in self._entries:
            if entry.link not in seen:
                seen.append(entry.link)
        return seen

    def __iter__(self) -> Iterator[PortfolioEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PortfolioIndex({len(self._entries)} entries)"
