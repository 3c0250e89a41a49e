# src/aio_config/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Este módulo implementa a política oficial de deep-merge utilizada pelo
aio-config para resolver a visão final a partir das fontes global,
local e de ambiente (nesta ordem de precedência).

Política de merge (v1):
    - dict + dict → merge recursivo por chave (sem distinção de caixa;
      a grafia da primeira fonte que definiu a chave é mantida)
    - list        → sobrescrita total (sem merge elemento a elemento)
    - escalar     → sobrescrita direta
    - None        → sobrescrita (remoção é expressa por None explícito)
    - conflito de tipos → sobrescrita pelo valor mais recente

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - A política é uma tabela de decisão explícita e testável

Invariantes:
    - O resultado não compartilha referências com nenhum input
    - Chaves não sobrescritas são preservadas

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não realiza coerção de tipos
"""

from copy import deepcopy
from enum import Enum
from typing import Any, Dict, Tuple

from .accessor import resolve_key
from .errors import ConfigTypeConflictError


class Shape(Enum):
    """Forma dinâmica de um valor de configuração."""

    SCALAR = "scalar"
    LIST = "list"
    MAPPING = "mapping"


class MergeAction(Enum):
    """Decisão tomada quando duas fontes definem a mesma chave."""

    REPLACE = "replace"
    RECURSE = "recurse"


# (existente, entrante) -> ação
MERGE_POLICY: Dict[Tuple[Shape, Shape], MergeAction] = {
    (existing, incoming): MergeAction.REPLACE
    for existing in Shape
    for incoming in Shape
}
MERGE_POLICY[(Shape.MAPPING, Shape.MAPPING)] = MergeAction.RECURSE


def shape_of(value: Any) -> Shape:
    if isinstance(value, dict):
        return Shape.MAPPING
    if isinstance(value, (list, tuple)):
        return Shape.LIST
    return Shape.SCALAR


def resolve_action(existing: Any, incoming: Any) -> MergeAction:
    """Consulta `MERGE_POLICY` para o par de valores informado."""
    return MERGE_POLICY[(shape_of(existing), shape_of(incoming))]


def _fold(dest: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    # `source` já é um clone; seus nós podem ser movidos para `dest`
    for key, incoming in source.items():
        key = resolve_key(dest, key)
        if key in dest and resolve_action(dest[key], incoming) is MergeAction.RECURSE:
            _fold(dest[key], incoming)
        else:
            dest[key] = incoming
    return dest


def deep_merge(*trees: Any) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico de N árvores de configuração.

    As árvores são aplicadas da esquerda para a direita; argumentos
    posteriores vencem. Cada input é clonado profundamente antes de ser
    incorporado ao acumulador, de modo que o resultado não compartilha
    nenhuma referência com estruturas mantidas pelo chamador.

    Decisões arquiteturais:
        - Argumentos `None` não contribuem com nenhuma chave
        - Valores `None` aninhados sobrescrevem o valor anterior
        - Listas nunca são mescladas elemento a elemento

    Invariantes:
        - `deep_merge()` e `deep_merge(None, None)` retornam `{}`
        - `deep_merge(T) == T` e `deep_merge(T) is not T`

    Args:
        *trees: Árvores de configuração, em ordem crescente de precedência.

    Returns:
        Dict[str, Any]: Nova árvore resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se algum argumento não for dict nem None.
    """
    result: Dict[str, Any] = {}

    for tree in trees:
        if tree is None:
            continue
        if not isinstance(tree, dict):
            raise ConfigTypeConflictError(
                f"Deep-merge requer dicts no nível raiz, recebido: {type(tree).__name__}"
            )
        _fold(result, deepcopy(tree))

    return result
