"""HTTP implementation of the OrderGateway port."""

from __future__ import annotations

import requests

from orderdesk.domain.exceptions import OrderSubmissionError
from orderdesk.domain.repository.order_gateway import OrderGateway, SubmittedOrder
from orderdesk.infrastructure.http.api_session import ApiSession, error_message


class HttpOrderGateway(OrderGateway):

    def __init__(self, api: ApiSession) -> None:
        self._api = api

    def submit(self, body: dict) -> SubmittedOrder:
        try:
            response = self._api.post("order/submit", body)
        except requests.RequestException as exc:
            raise OrderSubmissionError(f"Order submission failed: {exc}") from exc
        if not response.ok:
            raise OrderSubmissionError(
                f"Order rejected ({response.status_code}): {error_message(response)}",
                status_code=response.status_code,
            )
        try:
            order = response.json()["order"]
            order_id = str(order["id"])
        except (ValueError, KeyError, TypeError) as exc:
            raise OrderSubmissionError(
                "Backend response did not contain an order",
                status_code=response.status_code,
            ) from exc
        customer_id = order.get("customerId")
        return SubmittedOrder(
            id=order_id,
            customer_id=str(customer_id) if customer_id is not None else None,
            order_number=order.get("orderNumber"),
        )
