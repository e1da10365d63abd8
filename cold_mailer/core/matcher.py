"""
Skill Link Matcher - Picks portfolio links for a job's skill list.

Links come from the portfolio index first. Technical postings that find
nothing in the index still get the default technical links, while
non-technical postings get no links at all.
"""

from typing import Optional, Sequence
import logging

from .portfolio import PortfolioIndex


TECHNICAL_KEYWORDS = (
    "javascript", "typescript", "react", "node", "mongodb", "postgresql",
    "web", "development", "programming", "software", "full-stack", "frontend", "backend",
    "database", "api", "microservices", "html", "css", "express", "next.js", "vue",
)

DEFAULT_TECHNICAL_LINKS = (
    "https://github.com/balmukund/react-portfolio",
    "https://github.com/balmukund/nodejs-project",
)

MAX_LINKS = 2


class SkillLinkMatcher:
    """Matches job skills against a PortfolioIndex."""

    def __init__(
        self,
        default_links: Optional[Sequence[str]] = None,
        keywords: Sequence[str] = TECHNICAL_KEYWORDS,
        max_links: int = MAX_LINKS,
    ):
        self.default_links = list(default_links or DEFAULT_TECHNICAL_LINKS)
        self.keywords = tuple(k.lower() for k in keywords)
        self.max_links = max_links
        self.logger = logging.getLogger(self.__class__.__name__)

    def match(self, skills: Sequence[str], index: PortfolioIndex) -> list[str]:
        """
        Select up to max_links portfolio links for the given skills.

        Skills are processed in order and are not deduplicated; repeated
        links are suppressed so the first skill to find a link decides its
        position.

        Args:
            skills: Normalized skill names from a JobRecord
            index: Portfolio index to query

        Returns:
            Ordered list of distinct links, at most max_links long
        """
        matching_links: list[str] = []

        for skill in skills or []:
            if not isinstance(skill, str) or not skill.strip():
                continue

            skill_lower = skill.strip().lower()

            for link in index.lookup(skill_lower):
                if link not in matching_links:
                    matching_links.append(link)

            # Checked per skill, not once after the loop: defaults only land
            # while nothing has matched yet, so skill order changes the result.
            if self.is_technical(skill_lower) and not matching_links:
                self.logger.debug(f"No portfolio match yet for {skill!r}, adding default links")
                for link in self.default_links:
                    if link not in matching_links:
                        matching_links.append(link)

        selection = matching_links[:self.max_links]
        self.logger.info(f"Selected {len(selection)} portfolio links for {len(skills or [])} skills")
        return selection

    def is_technical(self, skill_lower: str) -> bool:
        """Check whether a lowercased skill overlaps a technical keyword."""
        return any(
            keyword in skill_lower or skill_lower in keyword
            for keyword in self.keywords
        )
