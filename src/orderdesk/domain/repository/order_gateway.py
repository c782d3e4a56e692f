"""Abstract port for the backend order-creation endpoint."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SubmittedOrder:
    """What the backend returns for a created order."""

    id: str
    customer_id: str | None = None
    order_number: str | None = None


class OrderGateway(ABC):

    @abstractmethod
    def submit(self, body: dict) -> SubmittedOrder:
        """Post an order-creation request body.

        Raises OrderSubmissionError if the backend rejects the order.
        """
