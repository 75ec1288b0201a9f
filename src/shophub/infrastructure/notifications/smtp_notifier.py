"""Order confirmation e-mail over SMTP."""

from __future__ import annotations

import smtplib
from email.message import EmailMessage
from html import escape

import structlog

from shophub.application.dto import OrderDTO
from shophub.application.notifier import Notifier
from shophub.domain.model.value_objects import Customer

logger = structlog.get_logger(__name__)


def confirmation_subject(order: OrderDTO) -> str:
    return f"Your Shophub Order #{order.id} is Confirmed!"


def confirmation_text(recipient: Customer, order: OrderDTO) -> str:
    lines = [
        f"Hi {recipient.display_name},",
        "",
        "Thank you for your order! We've received it and will process it shortly.",
        "",
        f"Order #{order.id}",
        f"Date: {order.placed_at}",
        "",
    ]
    for item in order.items:
        lines.append(
            f"  {item.product_name:<30} x{item.quantity:<4} "
            f"{item.unit_price_display:>10} {item.line_total_display:>12}"
        )
    lines += ["", f"Grand Total: {order.total_display}", "", "Thanks again for shopping with us!"]
    return "\n".join(lines)


def confirmation_html(recipient: Customer, order: OrderDTO) -> str:
    rows = "".join(
        "<tr>"
        f"<td>{escape(item.product_name)}</td>"
        f'<td style="text-align:center">{item.quantity}</td>'
        f'<td style="text-align:right">{escape(item.unit_price_display)}</td>'
        f'<td style="text-align:right">{escape(item.line_total_display)}</td>'
        "</tr>"
        for item in order.items
    )
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: auto;">'
        "<h1>Shophub Order Confirmed!</h1>"
        f"<p>Hi {escape(recipient.display_name)},</p>"
        "<p>Thank you for your order! We've received it and will process it shortly.</p>"
        f"<h3>Order #{order.id}</h3>"
        f"<p><strong>Date:</strong> {escape(order.placed_at)}</p>"
        '<table style="width:100%; border-collapse: collapse;">'
        "<thead><tr><th>Product</th><th>Quantity</th><th>Price</th><th>Total</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
        f"<p style=\"text-align:right\"><strong>Grand Total: {escape(order.total_display)}</strong></p>"
        "<p>Thanks again for shopping with us!</p>"
        "</div>"
    )


class SmtpOrderNotifier(Notifier):

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def order_placed(self, recipient: Customer, order: OrderDTO) -> None:
        if not recipient.email:
            logger.info("notify.no_recipient", order_id=order.id, user_id=recipient.user_id)
            return

        msg = EmailMessage()
        msg["From"] = f"Shophub <{self._sender}>"
        msg["To"] = recipient.email
        msg["Subject"] = confirmation_subject(order)
        msg.set_content(confirmation_text(recipient, order))
        msg.add_alternative(confirmation_html(recipient, order), subtype="html")

        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            if self._use_tls:
                server.starttls()
            if self._username and self._password:
                server.login(self._username, self._password)
            server.send_message(msg)

        logger.info("notify.sent", order_id=order.id, to=recipient.email)


class LogOnlyNotifier(Notifier):
    """Stand-in used when no SMTP server is configured."""

    def order_placed(self, recipient: Customer, order: OrderDTO) -> None:
        logger.info(
            "notify.skipped",
            reason="smtp not configured",
            order_id=order.id,
            to=recipient.email or None,
        )
