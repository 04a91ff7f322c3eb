"""
Card supply backed by a remote deck service.

Speaks the deckofcardsapi.com protocol:

- ``GET {base}/new/shuffle/?deck_count=N`` creates a shuffled shoe
- ``GET {base}/{deck_id}/draw/?count=N`` draws cards
- ``GET {base}/{deck_id}/shuffle/[?remaining=true]`` reshuffles

Every response carries ``success`` and ``remaining``. HTTP calls are made
with `requests` on a worker thread so the coroutine interface never blocks
the event loop.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests

from twentyone.common.card import Card, Rank, Suit
from twentyone.common.errors import SupplyUnavailable
from twentyone.supply.base import CardSupply, DrawResult, ShoeHandle

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://deckofcardsapi.com/api/deck"


def card_from_payload(payload: Dict[str, Any]) -> Card:
    """
    Build a card from one entry of a draw response.

    Prefers the long ``value``/``suit`` fields ("KING", "HEARTS") and falls
    back to the short ``code`` ("KH").
    """
    try:
        if "value" in payload and "suit" in payload:
            return Card(Rank.from_name(payload["value"]), Suit[payload["suit"].upper()])
        return Card.from_code(payload["code"])
    except (KeyError, ValueError, AttributeError) as exc:
        raise SupplyUnavailable(f"Malformed card in response: {payload!r}") from exc


class RemoteCardSupply(CardSupply):
    """
    Card supply talking to a deckofcardsapi-compatible HTTP service.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the remote supply.

        Args:
            base_url: Root of the deck API, without a trailing slash
            timeout: Per-request timeout in seconds
            session: Optional requests session (a new one is created if None)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.executor = ThreadPoolExecutor(max_workers=1)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as exc:
            logger.warning("Deck service request %s failed: %s", url, exc)
            raise SupplyUnavailable(f"Deck service request failed: {exc}") from exc
        except ValueError as exc:
            logger.warning("Deck service returned invalid JSON for %s", url)
            raise SupplyUnavailable("Deck service returned invalid JSON") from exc

        if not isinstance(data, dict) or not data.get("success"):
            error = data.get("error") if isinstance(data, dict) else None
            logger.warning("Deck service rejected %s: %s", url, error)
            raise SupplyUnavailable(f"Deck service rejected request: {error or url}")
        if "remaining" not in data or "deck_id" not in data:
            raise SupplyUnavailable(f"Deck service response missing fields: {url}")
        return data

    async def _call(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self._get, path, params)

    async def initialize(self, deck_count: int) -> ShoeHandle:
        data = await self._call("new/shuffle/", {"deck_count": deck_count})
        logger.info("Opened remote shoe %s with %d decks", data["deck_id"], deck_count)
        return ShoeHandle(data["deck_id"], int(data["remaining"]))

    async def draw(self, handle: ShoeHandle, count: int) -> DrawResult:
        data = await self._call(f"{handle.deck_id}/draw/", {"count": count})
        cards = tuple(card_from_payload(entry) for entry in data.get("cards", []))
        if len(cards) != count:
            raise SupplyUnavailable(
                f"Deck service returned {len(cards)} cards, expected {count}"
            )
        return DrawResult(handle.deck_id, cards, int(data["remaining"]))

    async def reshuffle(
        self, handle: ShoeHandle, remaining_only: bool = True
    ) -> ShoeHandle:
        params = {"remaining": "true"} if remaining_only else None
        data = await self._call(f"{handle.deck_id}/shuffle/", params)
        return ShoeHandle(handle.deck_id, int(data["remaining"]))

    def close(self) -> None:
        self.session.close()
        self.executor.shutdown(wait=False)
