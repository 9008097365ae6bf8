from typing import Iterable, List, Tuple

Position = Tuple[int, int]


class Move:
    """
    Representa um movimento no tabuleiro.
    - hops: casas visitadas em ordem; a primeira é a origem da peça,
      as seguintes são as casas de pouso (passo simples ou saltos de captura)
    Um salto de duas linhas entre hops consecutivos é uma captura.
    """
    __slots__ = ('hops',)

    def __init__(self, hops: Iterable[Position]):
        self.hops: Tuple[Position, ...] = tuple((int(r), int(c)) for r, c in hops)
        if not self.hops:
            raise ValueError("um movimento precisa de pelo menos uma casa")

    @property
    def origin(self) -> Position:
        return self.hops[0]

    @property
    def destination(self) -> Position:
        return self.hops[-1]

    def captured(self) -> List[Position]:
        """Casas das peças capturadas (ponto médio de cada salto duplo)."""
        result = []
        for (r0, c0), (r1, c1) in zip(self.hops, self.hops[1:]):
            if abs(r0 - r1) == 2:
                result.append(((r0 + r1) // 2, (c0 + c1) // 2))
        return result

    def is_capture(self) -> bool:
        """Retorna True se o movimento for uma captura."""
        return bool(self.captured())

    def __len__(self):
        return len(self.hops)

    def __iter__(self):
        return iter(self.hops)

    def __str__(self):
        sep = ' x ' if self.is_capture() else ' -> '
        return sep.join(f"({r},{c})" for r, c in self.hops)

    def __repr__(self):
        return f"Move({list(self.hops)!r})"

    def __eq__(self, other):
        return isinstance(other, Move) and self.hops == other.hops

    def __hash__(self):
        return hash(self.hops)
