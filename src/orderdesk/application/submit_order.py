"""Application service: Submit Order use case.

Turns the composer's current selection into the backend's order-creation
request and posts it through the order gateway.
"""

from __future__ import annotations

import logging

from orderdesk.application.dto import SubmittedOrderDTO
from orderdesk.application.submission import build_payload
from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.composer import OrderLineComposer
from orderdesk.domain.repository.order_gateway import OrderGateway

logger = logging.getLogger(__name__)


class SubmitOrderHandler:

    def __init__(self, gateway: OrderGateway) -> None:
        self._gateway = gateway

    def handle(
        self,
        form_id: str,
        form_data: dict,
        composer: OrderLineComposer,
    ) -> SubmittedOrderDTO:
        if not form_id or not form_id.strip():
            raise ValidationError("Form id is required")

        snapshot = composer.snapshot()
        body = build_payload(snapshot).to_request_body(form_id.strip(), dict(form_data))
        order = self._gateway.submit(body)

        logger.info(
            "Submitted order %s with %d line(s), total %s",
            order.id, len(snapshot.lines), snapshot.total,
        )
        return SubmittedOrderDTO(
            id=order.id,
            customer_id=order.customer_id,
            order_number=order.order_number,
            total=str(snapshot.total),
        )
