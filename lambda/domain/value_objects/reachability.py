"""
Estado de alcançabilidade do cache remoto
"""
from enum import Enum


class ReachabilityState(str, Enum):
    """
    UNPROBED -> {REACHABLE, UNREACHABLE}

    Definido na inicialização por uma única tentativa de conexão. Com
    re-probe periódico habilitado, transições posteriores são permitidas.
    """
    UNPROBED = "unprobed"
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"
