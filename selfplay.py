#!/usr/bin/env python
# -*- coding: utf-8 -*-
# selfplay.py - Partidas do motor contra si mesmo (ou contra um jogador aleatório)

import argparse
import os
import random
import time
from typing import Callable, Dict, List, NamedTuple, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from board import Board, BLACK, RED, validate_side
from engine import apply_move, choose_move
from move import Move
from rules import generate_moves, promotion_row
from utils import get_logger

logger = get_logger(__name__)

DRAW = 0
MAX_MOVES = 200   # limite de lances (plies) antes de declarar empate

Player = Callable[[Board, int], Optional[Move]]


class GameResult(NamedTuple):
    winner: int                   # 1, -1 ou DRAW
    total_moves: int
    captures: Dict[int, int]
    promotions: Dict[int, int]
    final_board: Board


def engine_player(rng: Optional[random.Random] = None, max_depth: Optional[int] = None) -> Player:
    rng = rng if rng is not None else random.Random()

    def play(board: Board, side: int) -> Optional[Move]:
        return choose_move(board, side, rng=rng, max_depth=max_depth)
    return play


def random_player(rng: Optional[random.Random] = None) -> Player:
    rng = rng if rng is not None else random.Random()

    def play(board: Board, side: int) -> Optional[Move]:
        moves = generate_moves(board, side)
        return rng.choice(moves) if moves else None
    return play


def _is_promotion(board: Board, move: Move, side: int) -> bool:
    piece = board.get(move.origin)
    return abs(piece) == 1 and any(r == promotion_row(side) for r, _ in move.hops[1:])


def play_game(red_player: Player, black_player: Player, board: Optional[Board] = None,
              max_moves: int = MAX_MOVES, first: int = RED) -> GameResult:
    """
    Joga uma partida completa. O lado sem lances perde; passar de `max_moves`
    plies é empate.
    """
    board = board if board is not None else Board.initial()
    side = validate_side(first)
    players = {RED: red_player, BLACK: black_player}
    captures = {RED: 0, BLACK: 0}
    promotions = {RED: 0, BLACK: 0}
    total_moves = 0
    winner = DRAW

    while total_moves < max_moves:
        move = players[side](board, side)
        if move is None:
            winner = -side
            break
        captures[side] += len(move.captured())
        if _is_promotion(board, move, side):
            promotions[side] += 1
        board = apply_move(board, move, side)
        total_moves += 1
        side = -side

    return GameResult(winner, total_moves, captures, promotions, board)


class SelfPlayTester:
    """
    Executa várias partidas do motor e coleta estatísticas.
    opponent="engine" põe o motor dos dois lados; "random" usa um jogador
    aleatório como pretas.
    """
    def __init__(self, num_games: int = 10, max_depth: Optional[int] = None,
                 seed: Optional[int] = None, opponent: str = "engine", max_moves: int = MAX_MOVES):
        if opponent not in ("engine", "random"):
            raise ValueError(f"oponente desconhecido: {opponent!r}")
        self.num_games = num_games
        self.max_depth = max_depth
        self.opponent = opponent
        self.max_moves = max_moves
        self.rng = random.Random(seed)
        self.results: List[dict] = []
        self.stats = {
            'red_wins': 0,
            'black_wins': 0,
            'draws': 0,
            'avg_moves': 0.0,
            'red_captures': 0,
            'black_captures': 0,
            'red_promotions': 0,
            'black_promotions': 0,
        }

    def _players(self):
        red = engine_player(self.rng, self.max_depth)
        if self.opponent == "random":
            return red, random_player(self.rng)
        return red, engine_player(self.rng, self.max_depth)

    def run(self) -> pd.DataFrame:
        logger.info(f"Iniciando teste com {self.num_games} partidas "
                    f"(depth={self.max_depth or 'auto'}, oponente={self.opponent})")
        for i in range(self.num_games):
            red, black = self._players()
            start = time.time()
            game = play_game(red, black, max_moves=self.max_moves)
            elapsed = time.time() - start

            result = {
                'game_id': i + 1,
                'winner': {RED: 'red', BLACK: 'black'}.get(game.winner, 'draw'),
                'total_moves': game.total_moves,
                'red_captures': game.captures[RED],
                'black_captures': game.captures[BLACK],
                'red_promotions': game.promotions[RED],
                'black_promotions': game.promotions[BLACK],
                'seconds': round(elapsed, 3),
            }
            self.results.append(result)

            if game.winner == RED:
                self.stats['red_wins'] += 1
            elif game.winner == BLACK:
                self.stats['black_wins'] += 1
            else:
                self.stats['draws'] += 1
            self.stats['red_captures'] += game.captures[RED]
            self.stats['black_captures'] += game.captures[BLACK]
            self.stats['red_promotions'] += game.promotions[RED]
            self.stats['black_promotions'] += game.promotions[BLACK]

            logger.info(f"Partida {i+1}/{self.num_games}: {result['winner']} "
                        f"em {game.total_moves} lances ({elapsed:.1f}s)")

        if self.num_games:
            self.stats['avg_moves'] = sum(r['total_moves'] for r in self.results) / self.num_games
        return self.dataframe()

    def dataframe(self) -> pd.DataFrame:
        columns = ['game_id', 'winner', 'total_moves', 'red_captures', 'black_captures',
                   'red_promotions', 'black_promotions', 'seconds']
        return pd.DataFrame(self.results, columns=columns)

    def summary(self) -> str:
        n = max(1, self.num_games)
        s = self.stats
        lines = [
            "=" * 50,
            f"ESTATÍSTICAS FINAIS ({self.num_games} partidas)",
            "=" * 50,
            f"Vitórias vermelhas: {s['red_wins']} ({s['red_wins']/n*100:.1f}%)",
            f"Vitórias pretas: {s['black_wins']} ({s['black_wins']/n*100:.1f}%)",
            f"Empates: {s['draws']} ({s['draws']/n*100:.1f}%)",
            f"Média de lances por partida: {s['avg_moves']:.1f}",
            f"Total de capturas: vermelhas={s['red_captures']}, pretas={s['black_captures']}",
            f"Total de promoções: vermelhas={s['red_promotions']}, pretas={s['black_promotions']}",
            "=" * 50,
        ]
        return "\n".join(lines)

    def save_results(self, directory: str = ".") -> Dict[str, str]:
        """Salva os resultados em CSV e gera os gráficos. Retorna os caminhos gerados."""
        os.makedirs(directory, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        csv_path = os.path.join(directory, f"selfplay_{timestamp}.csv")
        self.dataframe().to_csv(csv_path, index=False)
        paths = {'csv': csv_path}
        png_path = os.path.join(directory, f"selfplay_{timestamp}.png")
        if self.plot(png_path):
            paths['png'] = png_path
        return paths

    def plot(self, path: str) -> bool:
        """Gera gráficos das estatísticas coletadas."""
        df = self.dataframe()
        try:
            fig, axs = plt.subplots(1, 3, figsize=(15, 5))

            sizes = [self.stats['red_wins'], self.stats['black_wins'], self.stats['draws']]
            axs[0].bar(['Vermelhas', 'Pretas', 'Empates'], sizes, color=['red', 'black', 'gray'])
            axs[0].set_title('Distribuição de Resultados')

            axs[1].bar(df['game_id'], df['red_captures'], label='Vermelhas', alpha=0.7, color='red')
            axs[1].bar(df['game_id'], df['black_captures'], label='Pretas', alpha=0.7,
                       color='black', bottom=df['red_captures'])
            axs[1].set_xlabel('Partida')
            axs[1].set_ylabel('Número de Capturas')
            axs[1].set_title('Capturas por Partida')
            axs[1].legend()

            axs[2].plot(df['game_id'], df['total_moves'], marker='o', linestyle='-')
            axs[2].axhline(y=self.stats['avg_moves'], color='r', linestyle='--',
                           label=f"Média: {self.stats['avg_moves']:.1f}")
            axs[2].set_xlabel('Partida')
            axs[2].set_ylabel('Número de Lances')
            axs[2].set_title('Total de Lances por Partida')
            axs[2].legend()

            plt.tight_layout()
            plt.savefig(path)
            plt.close(fig)
            return True
        except (ValueError, OSError) as e:
            logger.error(f"Erro ao gerar gráficos: {e}")
            return False


def main(argv=None):
    parser = argparse.ArgumentParser(description="Partidas automáticas do motor de damas")
    parser.add_argument("--games", type=int, default=10, help="número de partidas")
    parser.add_argument("--depth", type=int, default=None,
                        help="profundidade fixa (padrão: conforme peças no tabuleiro)")
    parser.add_argument("--seed", type=int, default=None, help="semente do sorteio de empates")
    parser.add_argument("--opponent", choices=("engine", "random"), default="engine")
    parser.add_argument("--max-moves", type=int, default=MAX_MOVES)
    parser.add_argument("--save", metavar="DIR", default=None, help="salva CSV e gráfico em DIR")
    args = parser.parse_args(argv)
    if args.depth is not None and args.depth < 0:
        parser.error("--depth precisa ser >= 0")

    tester = SelfPlayTester(num_games=args.games, max_depth=args.depth, seed=args.seed,
                            opponent=args.opponent, max_moves=args.max_moves)
    df = tester.run()
    print(df.to_string(index=False))
    print(tester.summary())
    if args.save:
        paths = tester.save_results(args.save)
        for kind, path in paths.items():
            print(f"{kind.upper()} salvo em '{path}'")
    return tester


if __name__ == "__main__":
    main()
