import random
from typing import Callable, List, Optional

from board import Board, BOARD_SIZE, EMPTY, validate_side
from move import Move
from rules import generate_moves, promotion_row
from utils import debug_move, get_logger

logger = get_logger(__name__)

ENGINE_NAME = "CheckerMaster 5000"

# --- PARÂMETROS DE TUNING ---
WIN_SCORE           = 1000
LOSS_SCORE          = -1000
PRUNE_THRESHOLD     = -4       # ramo com valor <= -4 é tratado como perdido
EDGE_COLUMNS        = (0, BOARD_SIZE - 1)
OPENING_PIECE_LIMIT = 22       # >= 22 peças no tabuleiro
ENDGAME_PIECE_LIMIT = 6        # <= 6 peças no tabuleiro
OPENING_DEPTH       = 4
MIDGAME_DEPTH       = 5
ENDGAME_DEPTH       = 6
# ----------------------------

# valores iniciais do nó max/min; voltam intactos quando o lado não tem lances
MAX_SENTINEL = -100000
MIN_SENTINEL = 100000

MoveGenerator = Callable[[Board, int], List[Move]]


def get_name() -> str:
    return ENGINE_NAME


def apply_move(board: Board, move: Optional[Move], side: int) -> Board:
    """
    Aplica um movimento (simples ou com captura) e retorna novo Board.
    Peças saltadas são removidas e homens que chegam à última linha viram damas.
    `move=None` devolve uma cópia igual (usado nos nós terminais sem lance).
    """
    grid = board.to_lists()
    if move is not None:
        last = move.hops[0]
        piece = grid[last[0]][last[1]]
        crown_row = promotion_row(side)
        for hop in move.hops:
            if hop[0] == crown_row:
                piece = 2 * side
            grid[hop[0]][hop[1]] = piece
            grid[last[0]][last[1]] = EMPTY
            if abs(last[0] - hop[0]) == 2:
                grid[(last[0] + hop[0]) // 2][(last[1] + hop[1]) // 2] = EMPTY
            last = hop
    return Board.unchecked(grid)


def board_value(board: Board, side: int) -> int:
    """
    Heurística do ponto de vista de `side`:
    1. peças próprias nas colunas da borda valem o dobro (não podem ser capturadas)
    2. damas próprias valem o dobro (andam em todas as direções)
    3. sem peças adversárias -> WIN_SCORE; sem homens próprios -> LOSS_SCORE
    """
    total = 0
    win = True
    lose = True
    for row in board.rows:
        for c, value in enumerate(row):
            if value * side < 0:
                win = False
            if value == side:
                lose = False
            piece_val = value
            if c in EDGE_COLUMNS and value == side:
                piece_val *= 2
            if value == 2 * side:
                piece_val *= 2
            total += piece_val
    if win:
        return WIN_SCORE
    if lose:
        return LOSS_SCORE
    return total * side


def search_depth(board: Board, side: int) -> int:
    """Profundidade de busca conforme o total de peças; finais têm busca mais funda."""
    mine = 0
    theirs = 0
    for row in board.rows:
        for value in row:
            if value * side > 0:
                mine += 1
            elif value * side < 0:
                theirs += 1
    total = mine + theirs
    if total >= OPENING_PIECE_LIMIT:
        return OPENING_DEPTH
    if total > ENDGAME_PIECE_LIMIT:
        return MIDGAME_DEPTH
    return ENDGAME_DEPTH


def get_max_move(board: Board, side: int,
                 move_generator: MoveGenerator = generate_moves) -> Optional[Move]:
    """Lance de `side` que maximiza o valor do tabuleiro resultante para `side` (1 ply)."""
    best_move = None
    best_value = None
    for mv in move_generator(board, side):
        val = board_value(apply_move(board, mv, side), side)
        if best_value is None or val > best_value:
            best_move, best_value = mv, val
    return best_move


def get_min_move(board: Board, my_side: int,
                 move_generator: MoveGenerator = generate_moves) -> Optional[Move]:
    """Resposta do adversário que minimiza o valor do tabuleiro para `my_side` (1 ply)."""
    opponent = -my_side
    best_move = None
    best_value = None
    for mv in move_generator(board, opponent):
        val = board_value(apply_move(board, mv, opponent), my_side)
        if best_value is None or val < best_value:
            best_move, best_value = mv, val
    return best_move


def minimax(board: Board, my_side: int, side_to_move: int, depth: int,
            move_generator: MoveGenerator = generate_moves) -> int:
    """
    Valor minimax de `board` para `my_side`, com `side_to_move` a jogar e
    `depth` plies restantes.

    Em depth == 0 o nó ainda olha um lance à frente: aplica o melhor lance
    imediato de quem joga (get_max_move / get_min_move) e avalia o resultado.

    Nós internos são cortados antes de gerar lances: valor <= PRUNE_THRESHOLD
    devolve PRUNE_THRESHOLD, vitória devolve WIN_SCORE. Os cortes usam sempre
    o valor de `my_side`, independente de quem está a jogar.
    """
    if depth == 0:
        if side_to_move == my_side:
            best = get_max_move(board, my_side, move_generator)
        else:
            best = get_min_move(board, my_side, move_generator)
        return board_value(apply_move(board, best, side_to_move), my_side)

    static = board_value(board, my_side)
    if static <= PRUNE_THRESHOLD:
        return PRUNE_THRESHOLD
    if static == WIN_SCORE:
        return WIN_SCORE

    if side_to_move == my_side:
        best_val = MAX_SENTINEL
        for mv in move_generator(board, side_to_move):
            child = apply_move(board, mv, side_to_move)
            best_val = max(best_val, minimax(child, my_side, -side_to_move, depth - 1, move_generator))
        return best_val

    best_val = MIN_SENTINEL
    for mv in move_generator(board, side_to_move):
        child = apply_move(board, mv, side_to_move)
        best_val = min(best_val, minimax(child, my_side, -side_to_move, depth - 1, move_generator))
    return best_val


def choose_move(board, side: int, rng: Optional[random.Random] = None,
                move_generator: MoveGenerator = generate_moves,
                max_depth: Optional[int] = None) -> Optional[Move]:
    """
    Escolhe o lance de `side`: avalia cada lance legal com minimax e sorteia
    (com `rng`) entre os que empatam no melhor valor. Retorna None se `side`
    não tiver lances.
    `board` pode ser um Board ou uma grade 8x8 (lista de listas).
    `max_depth` substitui a profundidade calculada por search_depth.
    """
    if not isinstance(board, Board):
        board = Board(board)
    validate_side(side)
    if max_depth is not None and max_depth < 0:
        raise ValueError(f"max_depth inválido: {max_depth} (esperado >= 0)")
    moves = move_generator(board, side)
    if not moves:
        logger.debug(f"{ENGINE_NAME}: lado {side} sem lances")
        return None
    if rng is None:
        rng = random.Random()

    depth = search_depth(board, side) if max_depth is None else max_depth
    scores = []
    for mv in moves:
        child = apply_move(board, mv, side)
        score = minimax(child, side, -side, depth, move_generator)
        debug_move(0, mv, score)
        scores.append(score)

    best_score = max(scores)
    best_moves = [mv for mv, score in zip(moves, scores) if score == best_score]
    chosen = rng.choice(best_moves)
    logger.debug(f"{ENGINE_NAME}: lado={side} depth={depth} lance={chosen} "
                 f"score={best_score} empates={len(best_moves)}")
    return chosen
