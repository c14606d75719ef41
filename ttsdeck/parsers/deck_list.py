"""
Parser for plain-text deck lists.

Deck list format, one card per line:
    [<amount>[x] ]<card name>

Example:
    3x Lightning Bolt
    2 Counterspell
    Black Lotus

Blank lines and lines starting with '#' are ignored. A line without an
amount requests a single copy. The same card may only appear once; use
the amount for copies.
"""

import logging
import re
from pathlib import Path

from ttsdeck.models.card import CardEntry, CardParser
from ttsdeck.models.errors import ParseError, ParseErrorKind

logger = logging.getLogger(__name__)

# Pattern: "3 Bolt", "3x Bolt", "3xBolt", "3 x Bolt"
# Groups: (amount, card_name)
AMOUNT_PATTERN = re.compile(r"^(\d+)(?:x\s*|\s+x\s+|\s+)(.*)$")

# Pattern: a bare amount with nothing after it ("3", "3x")
BARE_AMOUNT_PATTERN = re.compile(r"^\d+\s*x?$")

COMMENT_PREFIX = "#"


def parse_line(line: str, card_parser: CardParser) -> CardEntry:
    """
    Parse one deck-list line into a CardEntry.

    Args:
        line: A single line, without position information
        card_parser: Object whose ``parse`` turns a name into a card

    Returns:
        CardEntry for the line

    Raises:
        ParseError: If the amount is zero, the name is empty, or the
            card parser rejects the name. Errors carry a column but no line.
    """
    text = line.strip()
    leading = len(line) - len(line.lstrip())

    if BARE_AMOUNT_PATTERN.match(text):
        raise ParseError(ParseErrorKind.EMPTY_NAME, "Tried to create a card with an empty name")

    amount = 1
    name = text
    name_column = leading + 1

    match = AMOUNT_PATTERN.match(text)
    if match:
        amount = int(match.group(1))
        name = match.group(2).strip()
        name_column = leading + match.start(2) + 1

    if not name:
        raise ParseError(ParseErrorKind.EMPTY_NAME, "Tried to create a card with an empty name")
    if amount == 0:
        raise ParseError(
            ParseErrorKind.ZERO_AMOUNT,
            f"Tried to create {name} with an amount of 0",
            column=leading + 1,
        )

    try:
        card = card_parser.parse(name)
    except ParseError as e:
        raise ParseError(e.kind, e.message, column=e.column or name_column) from e

    return CardEntry(card=card, amount=amount)


def parse_text(text: str, card_parser: CardParser) -> list[CardEntry]:
    """
    Parse a whole deck list.

    Args:
        text: Deck list text
        card_parser: Object whose ``parse`` turns a name into a card

    Returns:
        One CardEntry per card line, in file order

    Raises:
        ParseError: On the first failing line, annotated with its one-based
            line number and content
    """
    entries: list[CardEntry] = []
    used_names: set[str] = set()

    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue

        try:
            entry = parse_line(line, card_parser)
        except ParseError as e:
            logger.debug("Deck list line %d rejected: %s", line_number, e.message)
            raise e.at_line(line_number, stripped) from e

        name = entry.card.name
        if name in used_names:
            raise ParseError(
                ParseErrorKind.DUPLICATE_NAME,
                f"The name `{name}` appears multiple times, which is not allowed",
                line=line_number,
                content=stripped,
            )
        used_names.add(name)
        entries.append(entry)

    logger.info(
        "deck_list_parsed",
        extra={
            "entry_count": len(entries),
            "card_count": sum(entry.amount for entry in entries),
        },
    )
    return entries


def parse_file(path: Path | str, card_parser: CardParser) -> list[CardEntry]:
    """
    Parse a deck-list file.

    Raises:
        ParseError: If the file can't be read, or on the first failing line
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(
            ParseErrorKind.UNREADABLE_FILE,
            f"Failed to load file `{path}`, with the following error: {e}",
        ) from e

    return parse_text(text, card_parser)
