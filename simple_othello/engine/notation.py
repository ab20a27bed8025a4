"""
Coordinate notation for Othello moves.

Converts between cell indices (0-63, row-major from the top-left) and
coordinate notation ('a1' top-left, 'h8' bottom-right) for move input and
game transcripts.
"""

# Special string for pass moves (no available moves)
PASS_NOTATION = '--'


def cell_to_notation(cell: int) -> str:
    """Convert cell index (0-63) to coordinate notation (e.g., 'e6')."""
    if cell < 0 or cell > 63:
        raise ValueError(f"Invalid cell: {cell}")

    file = cell % 8  # 0-7 (a-h)
    rank = cell // 8 + 1  # 1-8

    return f"{chr(ord('a') + file)}{rank}"


def notation_to_cell(notation: str) -> int:
    """Convert coordinate notation (e.g., 'e6') to cell index (0-63)."""
    if notation == PASS_NOTATION:
        raise ValueError(f"Cannot convert pass notation '{PASS_NOTATION}' to a cell")

    if len(notation) != 2:
        raise ValueError(f"Invalid notation format: {notation}")

    file_char = notation[0].lower()
    rank_char = notation[1]

    if not file_char.isalpha() or not rank_char.isdigit():
        raise ValueError(f"Invalid notation format: {notation}")

    file = ord(file_char) - ord('a')
    rank = int(rank_char) - 1

    if file < 0 or file > 7 or rank < 0 or rank > 7:
        raise ValueError(f"Invalid notation: {notation}")

    return rank * 8 + file


def moves_to_string(moves: list[int]) -> str:
    """Convert a list of cell indices to a notation string; -1 marks a pass."""
    return ''.join(PASS_NOTATION if m < 0 else cell_to_notation(m) for m in moves)


def string_to_moves(moves_str: str) -> list[int]:
    """Parse a notation string into cell indices (-1 for passes).

    Raises ValueError on malformed input.
    """
    if len(moves_str) % 2:
        raise ValueError(f"Incomplete notation: {moves_str}")
    moves = []
    for i in range(0, len(moves_str), 2):
        chunk = moves_str[i:i + 2]
        moves.append(-1 if chunk == PASS_NOTATION else notation_to_cell(chunk))
    return moves
