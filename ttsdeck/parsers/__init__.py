from ttsdeck.parsers.deck_list import parse_file, parse_line, parse_text

__all__ = [
    "parse_file",
    "parse_line",
    "parse_text",
]
