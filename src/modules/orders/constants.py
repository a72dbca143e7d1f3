"""Order domain constants.

Defines status choices and the single transition table consulted by
both ``OrderService.update_status`` and ``OrderService.cancel_order``.

Progress is forward-only: from a non-terminal state any *later* state
may be reached (skipping is allowed, going back is not).  ``CANCELADO``
appears as a target of every non-terminal state but is only reachable
through cancellation; its sole entry, ``CANCELADO -> CANCELADO``, is a
re-cancellation that overwrites the reason.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    CRIADO = "CRIADO", "Criado"
    EM_PREPARO = "EM_PREPARO", "Em preparo"
    SAIU_PARA_ENTREGA = "SAIU_PARA_ENTREGA", "Saiu para entrega"
    ENTREGUE = "ENTREGUE", "Entregue"
    CANCELADO = "CANCELADO", "Cancelado"


VALID_TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.CRIADO: frozenset(
        {
            OrderStatus.EM_PREPARO,
            OrderStatus.SAIU_PARA_ENTREGA,
            OrderStatus.ENTREGUE,
            OrderStatus.CANCELADO,
        }
    ),
    OrderStatus.EM_PREPARO: frozenset(
        {
            OrderStatus.SAIU_PARA_ENTREGA,
            OrderStatus.ENTREGUE,
            OrderStatus.CANCELADO,
        }
    ),
    OrderStatus.SAIU_PARA_ENTREGA: frozenset(
        {OrderStatus.ENTREGUE, OrderStatus.CANCELADO}
    ),
    OrderStatus.ENTREGUE: frozenset(),
    OrderStatus.CANCELADO: frozenset({OrderStatus.CANCELADO}),
}

TERMINAL_STATES: frozenset[str] = frozenset(
    {OrderStatus.ENTREGUE, OrderStatus.CANCELADO}
)
