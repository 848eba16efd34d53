"""The fixed catalog of plan action items."""

import logging
from datetime import date
from typing import Iterable, Iterator

from .exceptions import ActionNotFoundError
from .models import PRIORITIES, ActionItem

logger = logging.getLogger(__name__)


class Catalog:
    """Immutable, ordered collection of action items."""

    def __init__(self, items: Iterable[ActionItem]):
        """
        Build a catalog from action item definitions.

        Args:
            items: Action items in display order

        Raises:
            ValueError: On duplicate ids or unknown priorities
        """
        self._items = tuple(items)
        self._by_id: dict[str, ActionItem] = {}

        for item in self._items:
            if item.id in self._by_id:
                raise ValueError(f"Duplicate action id in catalog: {item.id}")
            if item.priority not in PRIORITIES:
                raise ValueError(
                    f"Action {item.id} has unknown priority: {item.priority}"
                )
            self._by_id[item.id] = item

        logger.debug(f"Catalog loaded with {len(self._items)} actions")

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ActionItem]:
        return iter(self._items)

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._by_id

    def list_all(self) -> list[ActionItem]:
        """All items in definition order."""
        return list(self._items)

    def by_phase(self, phase: int) -> list[ActionItem]:
        """Items of one phase, in definition order."""
        return [item for item in self._items if item.phase == phase]

    def by_id(self, action_id: str) -> ActionItem:
        """
        Look up an item.

        Raises:
            ActionNotFoundError: If the id is not in the catalog
        """
        try:
            return self._by_id[action_id]
        except KeyError:
            raise ActionNotFoundError(action_id) from None

    def phases(self) -> list[int]:
        """Distinct phases, ascending."""
        return sorted({item.phase for item in self._items})

    def phase_size(self, phase: int) -> int:
        return len(self.by_phase(phase))


REFERENCE_CATALOG = Catalog(
    [
        # Phase 1: days 0-30
        ActionItem(
            id="p1_1",
            phase=1,
            priority="critical",
            title="Swap in affiliate links",
            description="Replace the Hostinger, NordVPN and Notion referral links with your own affiliate links. Zero cost, immediate revenue potential.",
            emoji="🔗",
        ),
        ActionItem(
            id="p1_2",
            phase=1,
            priority="critical",
            title="X Premium + monetization application",
            description="Buy X Premium and apply to the monetization program. Required for the ad revenue share.",
            emoji="⭐",
            pre_completed=True,
            pre_completed_date=date(2026, 2, 20),
        ),
        ActionItem(
            id="p1_3",
            phase=1,
            priority="important",
            title="Add an email opt-in to the landing page",
            description="Add an email capture form. The first 1K emails are a valuable asset.",
            emoji="📧",
        ),
        ActionItem(
            id="p1_4",
            phase=1,
            priority="important",
            title="Publish a tool launch thread",
            description="Post a launch thread on X with screenshots, features and a link.",
            emoji="🧵",
        ),
        ActionItem(
            id="p1_5",
            phase=1,
            priority="normal",
            title="SEO: blog section + first 3 articles",
            description="Open a blog targeting monetization keywords and write the first three articles.",
            emoji="📝",
        ),
        ActionItem(
            id="p1_6",
            phase=1,
            priority="normal",
            title="Start a reply-first strategy",
            description="Write 50+ quality replies a day to reach the followers of large accounts.",
            emoji="💬",
        ),
        # Phase 2: days 31-60
        ActionItem(
            id="p2_1",
            phase=2,
            priority="critical",
            title="Integrate a URL shortener",
            description="Integrate a link shortener and start tracking clicks and conversions.",
            emoji="🔗",
        ),
        ActionItem(
            id="p2_2",
            phase=2,
            priority="critical",
            title="Product Hunt launch",
            description="Register on Product Hunt and prepare copy, images and community support for launch day.",
            emoji="🚀",
        ),
        ActionItem(
            id="p2_3",
            phase=2,
            priority="important",
            title="AI content suggestions",
            description="Connect a language model API and build a basic tweet suggestion engine.",
            emoji="🤖",
        ),
        ActionItem(
            id="p2_4",
            phase=2,
            priority="important",
            title="Partner with 3 creators",
            description="Agree on tool promotion with three creators for mutual growth.",
            emoji="🤝",
        ),
        ActionItem(
            id="p2_5",
            phase=2,
            priority="normal",
            title="Draft the e-book",
            description="Write a 5,000 word e-book draft and plan its sales from the dashboard.",
            emoji="📚",
        ),
        ActionItem(
            id="p2_6",
            phase=2,
            priority="normal",
            title="Analytics pattern review",
            description="Enter analytics regularly and find the best hours, days and content types.",
            emoji="📊",
        ),
        # Phase 3: days 61-90
        ActionItem(
            id="p3_1",
            phase=3,
            priority="critical",
            title="Payments + premium plan",
            description="Integrate payments for a premium plan, open a beta list and aim for the first subscriber.",
            emoji="💳",
        ),
        ActionItem(
            id="p3_2",
            phase=3,
            priority="critical",
            title="Official API application",
            description="Apply for the basic API plan, work out the ROI and plan automatic revenue import.",
            emoji="⚙️",
        ),
        ActionItem(
            id="p3_3",
            phase=3,
            priority="important",
            title="Start sponsorship outreach",
            description="Send sponsorship offers to three SaaS brands for dashboard placements.",
            emoji="💼",
        ),
        ActionItem(
            id="p3_4",
            phase=3,
            priority="important",
            title="Put the e-book on sale",
            description="Publish the e-book for sale and promote it on social media.",
            emoji="📖",
        ),
        ActionItem(
            id="p3_5",
            phase=3,
            priority="normal",
            title="Start MRR tracking",
            description="Track monthly recurring revenue and add MRR metrics to the revenue dashboard.",
            emoji="📈",
        ),
        ActionItem(
            id="p3_6",
            phase=3,
            priority="normal",
            title="Day 90 review + next quarter plan",
            description="Review what worked and what did not over the 90 days and write the next plan.",
            emoji="🎯",
        ),
    ]
)
