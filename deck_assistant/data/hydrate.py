"""Attach fetched card data to decklist entries."""

import logging
from typing import Callable, Optional

from deck_assistant.contracts import CardProvider
from deck_assistant.data.scryfall import index_by_names
from deck_assistant.models.decklist import DeckList

logger = logging.getLogger(__name__)


def hydrate_decklist(
    deck_list: DeckList,
    client: CardProvider,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> list[str]:
    """
    Look up every card in a decklist and attach it to its entries.

    Entries are matched by exact name, then case-insensitively, then by
    the front face of a multi-faced card. Unmatched entries keep card=None.

    Args:
        deck_list: Decklist to hydrate in place
        client: Card provider
        progress_callback: Optional callback(done, total)

    Returns:
        Names that could not be found
    """
    names = [e.name for e in deck_list.entries if e.card is None]
    if not names:
        return []

    fetched = client.batch_fetch_cards(names, progress_callback)
    index = index_by_names(list(fetched.values()))

    missing = []
    for entry in deck_list.entries:
        if entry.card is not None:
            continue
        card = fetched.get(entry.name) or index.get(entry.name.lower())
        if card is None:
            missing.append(entry.name)
            continue
        entry.card = card

    missing = list(dict.fromkeys(missing))
    if missing:
        logger.warning(f"{len(missing)} cards could not be found: {', '.join(missing)}")
    return missing
