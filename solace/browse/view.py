"""Browse view model: debounced search, infinite scroll and local filters.

The view owns the list of fetched pages. A UI drives it by calling
``on_input`` for keystrokes, ``load_more`` when the scroll sentinel becomes
visible, ``reset_search`` for the clear button and ``set_filters`` for the
pickers, then renders ``displayed``.
"""
from __future__ import annotations

import logging

from solace.config import settings
from solace.schemas import AdvocateDTO

from .client import AdvocatesClient, AdvocatesClientError
from .debounce import Debouncer
from .filters import (
    YEARS_OPTIONS,
    FilterState,
    YearsBucket,
    apply_filters,
    city_options,
    degree_options,
    relevant_specialties,
)

logger = logging.getLogger(__name__)


class AdvocateBrowser:
    """Client-side state for the advocates search page."""

    def __init__(
        self,
        client: AdvocatesClient,
        *,
        page_size: int | None = None,
        debounce_ms: int | None = None,
    ):
        self._client = client
        self.page_size = page_size or settings.browse.page_size
        delay_ms = settings.browse.debounce_ms if debounce_ms is None else debounce_ms
        self._debouncer: Debouncer[str] = Debouncer(self._commit_from_input, delay=delay_ms / 1000)

        self.input_value = ""
        self.term = ""
        self.filters = FilterState()
        self.last_error: AdvocatesClientError | None = None

        self._pages: list[list[AdvocateDTO]] = []
        self._fetching = False
        # Bumped on every committed term; responses from older terms are dropped
        self._generation = 0

    # --- derived state -------------------------------------------------

    @property
    def advocates(self) -> list[AdvocateDTO]:
        return [a for page in self._pages for a in page]

    @property
    def pages_loaded(self) -> int:
        return len(self._pages)

    @property
    def has_more(self) -> bool:
        return bool(self._pages) and len(self._pages[-1]) == self.page_size

    @property
    def is_fetching(self) -> bool:
        return self._fetching

    @property
    def is_searching(self) -> bool:
        return self.term != ""

    @property
    def displayed(self) -> list[AdvocateDTO]:
        return apply_filters(self.advocates, self.filters)

    @property
    def city_options(self) -> list[str]:
        return city_options(self.advocates)

    @property
    def degree_options(self) -> list[str]:
        return degree_options(self.advocates)

    @property
    def years_options(self) -> list[str]:
        return list(YEARS_OPTIONS)

    def specialties_for(self, advocate: AdvocateDTO) -> list[str]:
        return relevant_specialties(advocate.specialties, self.term)

    # --- search --------------------------------------------------------

    async def start(self) -> None:
        """Load the first unfiltered page."""
        await self.commit_search("")

    def on_input(self, value: str) -> None:
        """Record a keystroke; the search commits after the debounce delay."""
        self.input_value = value
        self._debouncer(value)

    async def wait_for_search(self) -> None:
        """Wait until a debounced keystroke (if any) has committed and loaded."""
        await self._debouncer.wait()

    async def _commit_from_input(self, raw_term: str) -> None:
        # Runs in the debounce task; failures are surfaced through last_error
        try:
            await self.commit_search(raw_term)
        except AdvocatesClientError as e:
            logger.warning(f"Search for {raw_term.strip()!r} failed: {e}")

    async def commit_search(self, raw_term: str) -> None:
        """Switch to a new term and load its first page."""
        self.term = raw_term.strip()
        self._generation += 1
        self._pages = []
        self._fetching = False
        logger.debug(f"Committed search term {self.term!r}")
        await self._fetch_page(1)

    async def reset_search(self) -> None:
        """Clear the input and return to the unfiltered first page."""
        self._debouncer.cancel()
        self.input_value = ""
        await self.commit_search("")

    # --- pagination ----------------------------------------------------

    async def load_more(self) -> bool:
        """Append the next page; ignored while fetching or when exhausted.

        Returns True if a page was fetched and appended.
        """
        if self._fetching or not self.has_more:
            return False
        return await self._fetch_page(self.pages_loaded + 1)

    async def _fetch_page(self, page: int) -> bool:
        generation = self._generation
        self._fetching = True
        try:
            rows = await self._client.fetch_page(self.term, page, self.page_size)
        except AdvocatesClientError as e:
            if generation == self._generation:
                self.last_error = e
            raise
        finally:
            if generation == self._generation:
                self._fetching = False

        if generation != self._generation:
            logger.debug(f"Discarding stale page {page}")
            return False

        self._pages.append(rows)
        self.last_error = None
        return True

    # --- filters -------------------------------------------------------

    def set_filters(
        self,
        *,
        city: str | None = None,
        degree: str | None = None,
        years: YearsBucket | str | None = None,
    ) -> list[AdvocateDTO]:
        """Update the pickers (None keeps a value, "" clears it); returns ``displayed``."""
        current = self.filters
        if years is None:
            bucket = current.years
        elif years == "":
            bucket = None
        else:
            bucket = YearsBucket(years)
        self.filters = FilterState(
            city=current.city if city is None else city,
            degree=current.degree if degree is None else degree,
            years=bucket,
        )
        return self.displayed

    def clear_filters(self) -> None:
        self.filters = FilterState()
