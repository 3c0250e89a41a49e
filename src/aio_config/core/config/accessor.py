# src/aio_config/core/config/accessor.py
"""
Acesso por notação de ponto a árvores de configuração.

Um caminho (`DotPath`) é uma string de segmentos separados por `.`,
por exemplo `pgb.auth_token`. Segmentos vazios ou apenas com espaços
são ignorados, e o caminho vazio representa a árvore inteira.

Política de acesso (v1):
    - leitura → busca de chave case-insensitive, curto-circuito em `None`
    - escrita → copy-on-write por nível; chave existente (sem distinção de
      caixa) é reutilizada, chave nova é gravada como recebida

Invariantes:
    - `set_value` nunca muta a árvore de entrada
    - `get_value` nunca levanta exceção por caminho inexistente

Limites explícitos:
    - Não clona o valor retornado por `get_value` (responsabilidade do chamador)
    - Não sinaliza erro quando um escalar bloqueia o caminho na escrita
"""

from typing import Any, Dict, List, Optional


def split_path(path: Any) -> List[str]:
    """Divide um caminho em segmentos, descartando segmentos em branco."""
    if path is None:
        return []
    return [part for part in str(path).split(".") if part.strip()]


def find_key(node: Dict[str, Any], segment: Any) -> Optional[Any]:
    """Retorna a primeira chave de `node` igual a `segment` sem distinção de caixa."""
    wanted = str(segment).lower()
    for key in node:
        if str(key).lower() == wanted:
            return key
    return None


def resolve_key(node: Dict[str, Any], segment: Any) -> Any:
    """Chave existente que casa com `segment`, ou o próprio `segment`."""
    key = find_key(node, segment)
    return segment if key is None else key


def get_value(tree: Any, path: Any = "") -> Any:
    """
    Lê um valor de uma árvore de configuração pela notação de ponto.

    Cada segmento é resolvido contra o nó corrente por comparação
    case-insensitive de chaves (primeira correspondência na ordem de
    inserção vence).

    Args:
        tree: Árvore de configuração (ou qualquer valor).
        path: Caminho em notação de ponto. Vazio retorna `tree`.

    Returns:
        O valor encontrado, ou `None` se algum segmento não existir
        ou se um nó intermediário não for um mapa.
    """
    node = tree
    for segment in split_path(path):
        if not isinstance(node, dict):
            return None
        key = find_key(node, segment)
        if key is None:
            return None
        node = node[key]
    return node


def set_value(path: Any, value: Any, tree: Optional[Dict[str, Any]] = None) -> Any:
    """
    Produz uma nova árvore com `value` gravado em `path`.

    Cada mapa no caminho da raiz até a folha é copiado superficialmente;
    irmãos fora do caminho são compartilhados por referência com `tree`.
    Nós intermediários ausentes, ou que não são mapas, são substituídos
    por mapas novos.

    Decisões arquiteturais:
        - Caminho sem segmentos retorna `value` (substitui a árvore inteira)
        - `value=None` é gravado como `None`, não remove a chave
        - Segmentos reutilizam a chave existente que casa sem distinção de
          caixa; só chaves novas mantêm a grafia recebida

    Args:
        path: Caminho em notação de ponto.
        value: Valor a gravar.
        tree: Árvore base (opcional, nunca mutada).

    Returns:
        A nova árvore (ou `value`, para caminho vazio).
    """
    parts = split_path(path)
    if not parts:
        return value

    result: Dict[str, Any] = dict(tree) if isinstance(tree, dict) else {}
    node = result
    for part in parts[:-1]:
        key = resolve_key(node, part)
        child = node.get(key)
        node[key] = dict(child) if isinstance(child, dict) else {}
        node = node[key]

    node[resolve_key(node, parts[-1])] = value
    return result
