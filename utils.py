import logging
from typing import Union

# flag global para habilitar o trace da busca (desative em produção para não frear a pesquisa)
DEBUG = False

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Logger do módulo com um StreamHandler próprio (só adicionado uma vez)."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.hasHandlers():
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
    return logger


_trace = get_logger("checkers.trace", logging.DEBUG)


def debug_move(depth: int, move, score: Union[float, int]):
    """
    Emite linha de trace padronizada se DEBUG estiver True.

    depth   – profundidade do nó (raiz = 0)
    move    – instância de Move ou string
    score   – valor minimax do lance
    """
    if not DEBUG:
        return
    indent = "  " * depth
    _trace.debug(f"{indent}[d={depth}] move {move} score={score}")
