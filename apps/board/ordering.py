# apps/board/ordering.py

"""
Política de atribuição de `order`

Criação: nova tarefa vai para o fim da sequência do dono
(maior order + 1, ou 1 se o dono não tem tarefas).

A leitura do maior valor e a gravação não são atômicas. Duas criações
concorrentes do mesmo dono podem ler o mesmo topo e receber o mesmo
`order`. A listagem continua determinística (desempate por criação e id).

Update: `order` explícito é aceito como veio; omitido ou null preserva
o valor gravado.

`order` é BigIntegerField. O maior valor da coluna fica reservado para
que o topo + 1 de uma criação sempre caiba.
"""

from typing import Dict

from .exceptions import ValidationError

FIRST_ORDER = 1

# Faixa de models.BigIntegerField
MIN_ORDER = -2 ** 63
MAX_ORDER = 2 ** 63 - 1


class OrderAssignmentPolicy:
    """Calcula `order` para criação e normaliza `order` no update"""

    def __init__(self, store):
        self.store = store

    def next_order(self, owner_id: str) -> int:
        """Posição de uma nova tarefa do dono (fim da lista)"""
        top = self.store.find_top_order(owner_id)
        if top is None:
            return FIRST_ORDER
        if top >= MAX_ORDER:
            raise ValidationError(
                'order has no room for a new task',
                errors={'order': [f'owner already has a task at order {top}']},
            )
        return top + 1

    def fields_for_update(self, fields: Dict) -> Dict:
        """
        Retorna cópia dos campos com `order` tratado

        - ausente ou None: removido (valor atual é mantido)
        - presente: convertido para int e usado literalmente
        """
        result = dict(fields)
        if result.get('order') is None:
            result.pop('order', None)
        else:
            result['order'] = coerce_order(result['order'])
        return result


def coerce_order(value) -> int:
    """
    Converte `order` vindo do JSON para int

    Rejeita o que não é inteiro e o que sai de MIN_ORDER..MAX_ORDER - 1.
    """
    order = _as_int(value)
    if order is None:
        raise ValidationError('order must be an integer', errors={'order': ['must be an integer']})

    if not MIN_ORDER <= order < MAX_ORDER:
        raise ValidationError(
            'order is out of range',
            errors={'order': [f'must be between {MIN_ORDER} and {MAX_ORDER - 1}']},
        )
    return order


def _as_int(value):
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float) and value.is_integer():
        return int(value)

    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None

    return None
