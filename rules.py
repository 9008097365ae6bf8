from typing import List, Set, Tuple

from board import Board, BOARD_SIZE, EMPTY, Position
from move import Move

# quatro direções diagonais
KING_DIRECTIONS = [(-1, -1), (-1, +1), (+1, -1), (+1, +1)]


def forward_directions(side: int) -> List[Tuple[int, int]]:
    """Direções de avanço de um homem: o lado +1 sobe para a linha 7, o -1 desce para a 0."""
    return [(side, -1), (side, +1)]


def promotion_row(side: int) -> int:
    return BOARD_SIZE - 1 if side > 0 else 0


def _directions(piece: int, side: int) -> List[Tuple[int, int]]:
    return KING_DIRECTIONS if abs(piece) == 2 else forward_directions(side)


def _search_captures(grid, pos: Position, side: int, piece: int,
                     jumped: Set[Position], path: List[Position], out: List[Move]):
    """Busca recursiva de cadeias de captura; só cadeias completas entram em `out`."""
    r0, c0 = pos
    found = False
    # homem que chega à última linha é promovido e encerra o lance
    crowned = abs(piece) == 1 and len(path) > 1 and r0 == promotion_row(side)
    if not crowned:
        for dr, dc in _directions(piece, side):
            mr, mc = r0 + dr, c0 + dc
            lr, lc = r0 + 2*dr, c0 + 2*dc
            if not Board.on_board(lr, lc):
                continue
            if grid[mr][mc] * side >= 0 or (mr, mc) in jumped:
                continue
            if grid[lr][lc] != EMPTY:
                continue
            found = True
            _search_captures(grid, (lr, lc), side, piece,
                             jumped | {(mr, mc)}, path + [(lr, lc)], out)
    if not found and len(path) > 1:
        out.append(Move(path))


def generate_moves(board: Board, side: int) -> List[Move]:
    """
    Gera todos os movimentos válidos para `side` (regras de damas inglesas),
    respeitando captura obrigatória e saltos múltiplos.
    """
    grid = board.to_lists()
    captures: List[Move] = []
    simples: List[Move] = []

    for r, c, piece in board.cells():
        if piece * side <= 0:
            continue
        # a casa de origem fica livre durante a cadeia (dama pode voltar a ela)
        grid[r][c] = EMPTY
        _search_captures(grid, (r, c), side, piece, set(), [(r, c)], captures)
        grid[r][c] = piece

        # movimentos simples (só contam se não houver capturas em todo tabuleiro)
        if not captures:
            for dr, dc in _directions(piece, side):
                nr, nc = r + dr, c + dc
                if Board.on_board(nr, nc) and grid[nr][nc] == EMPTY:
                    simples.append(Move([(r, c), (nr, nc)]))

    return captures if captures else simples
