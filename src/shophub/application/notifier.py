"""Notifier port: post-commit customer notifications.

Delivery is best effort.  Implementations raise on failure; the order
flow logs that and carries on, because the order is already committed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shophub.application.dto import OrderDTO
from shophub.domain.model.value_objects import Customer


class Notifier(ABC):

    @abstractmethod
    def order_placed(self, recipient: Customer, order: OrderDTO) -> None:
        """Tell ``recipient`` their order was placed."""
