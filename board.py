from typing import Dict, Iterable, List, Sequence, Tuple

BOARD_SIZE = 8

# valores das casas
EMPTY      = 0
RED        = 1    # homem do lado +1
BLACK      = -1   # homem do lado -1
RED_KING   = 2
BLACK_KING = -2

CELL_VALUES = (EMPTY, RED, BLACK, RED_KING, BLACK_KING)

Position = Tuple[int, int]


class InvalidBoardError(ValueError):
    """Tabuleiro fora do formato 8x8 ou com valor de casa inválido."""
    pass


class InvalidSideError(ValueError):
    """Lado diferente de +1 / -1."""
    pass


def validate_side(side: int) -> int:
    if side not in (RED, BLACK):
        raise InvalidSideError(f"lado inválido: {side!r} (esperado 1 ou -1)")
    return side


class Board:
    """
    Representa o estado do tabuleiro como uma grade 8x8 imutável.
    - cada casa vale 0 (vazia), ±1 (homem) ou ±2 (dama)
    - o sinal indica o dono: +1 é o lado vermelho, -1 o lado preto
    Toda alteração gera um novo Board; nenhuma instância é modificada.
    """
    __slots__ = ('_grid',)

    def __init__(self, rows: Sequence[Sequence[int]]):
        if len(rows) != BOARD_SIZE:
            raise InvalidBoardError(f"esperadas {BOARD_SIZE} linhas, recebidas {len(rows)}")
        grid = []
        for r, row in enumerate(rows):
            if len(row) != BOARD_SIZE:
                raise InvalidBoardError(f"linha {r} com {len(row)} colunas")
            for c, value in enumerate(row):
                # bool é subclasse de int; True passaria como 1
                if isinstance(value, bool) or not isinstance(value, int) or value not in CELL_VALUES:
                    raise InvalidBoardError(f"valor inválido {value!r} em ({r},{c})")
            grid.append(tuple(row))
        self._grid = tuple(grid)

    @classmethod
    def unchecked(cls, rows: List[List[int]]) -> 'Board':
        """Constrói sem validar; só para grades derivadas de um Board válido."""
        board = cls.__new__(cls)
        board._grid = tuple(tuple(row) for row in rows)
        return board

    @staticmethod
    def empty() -> 'Board':
        return Board([[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @staticmethod
    def initial() -> 'Board':
        """Retorna o tabuleiro inicial padrão (12 peças por lado nas casas escuras)."""
        rows = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if not Board.is_dark_square(r, c):
                    continue
                if r <= 2:
                    rows[r][c] = RED
                elif r >= 5:
                    rows[r][c] = BLACK
        return Board(rows)

    @staticmethod
    def is_dark_square(row: int, col: int) -> bool:
        return (row + col) % 2 == 1

    @staticmethod
    def on_board(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    @property
    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        return self._grid

    def __getitem__(self, row: int) -> Tuple[int, ...]:
        return self._grid[row]

    def get(self, pos: Position) -> int:
        r, c = pos
        return self._grid[r][c]

    def to_lists(self) -> List[List[int]]:
        """Cópia mutável da grade (lista de listas)."""
        return [list(row) for row in self._grid]

    def with_cells(self, changes: Dict[Position, int]) -> 'Board':
        """Retorna um novo Board com as casas em `changes` substituídas."""
        rows = self.to_lists()
        for (r, c), value in changes.items():
            rows[r][c] = value
        return Board(rows)

    def cells(self) -> Iterable[Tuple[int, int, int]]:
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                yield r, c, self._grid[r][c]

    def count_pieces(self, side: int) -> int:
        """Número de peças (homens e damas) pertencentes a `side`."""
        return sum(1 for _, _, v in self.cells() if v * side > 0)

    def total_pieces(self) -> int:
        return sum(1 for _, _, v in self.cells() if v != EMPTY)

    def __eq__(self, other):
        return isinstance(other, Board) and self._grid == other._grid

    def __hash__(self):
        return hash(self._grid)

    def __repr__(self):
        return f"Board({[list(row) for row in self._grid]!r})"

    def __str__(self):
        """Retorna uma string visual do tabuleiro para debug."""
        chars = {EMPTY: '. ', RED: 'r ', RED_KING: 'R ', BLACK: 'b ', BLACK_KING: 'B '}
        lines = []
        for r in range(BOARD_SIZE - 1, -1, -1):
            lines.append(f"{r} " + ''.join(chars[v] for v in self._grid[r]))
        lines.append("  " + ''.join(f"{c} " for c in range(BOARD_SIZE)))
        return '\n'.join(line.rstrip() for line in lines)
