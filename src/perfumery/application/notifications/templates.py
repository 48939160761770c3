"""Email and SMS content for order notifications.

Everything here is plain string composition over a committed Order;
nothing is sent and nothing is computed beyond line totals.  Text that
came from the customer is HTML-escaped before it goes into an email.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from html import escape

from perfumery.application.notifications.channels import EmailMessage
from perfumery.domain.model.order import Order, PaymentMethod

STATUS_SMS = {
    "pending": "Your order {number} has been received and is awaiting confirmation.",
    "confirmed": "Your order {number} is confirmed and being prepared.",
    "processing": "Your order {number} is being processed.",
    "shipped": "Great news! Your order {number} has been shipped and is on the way.",
    "delivered": "Your order {number} has been delivered. Thank you for shopping with {store}!",
    "cancelled": "Your order {number} has been cancelled. If you have questions, please call us.",
}
FALLBACK_STATUS_SMS = "Order status updated."

STATUS_TITLES = {
    "pending": "Order Received",
    "confirmed": "Order Confirmed",
    "processing": "Order Being Processed",
    "shipped": "Order Shipped",
    "delivered": "Order Delivered",
    "cancelled": "Order Cancelled",
}
FALLBACK_STATUS_TITLE = "Order Status Updated"

_HEADER_STYLE = (
    "background: linear-gradient(135deg, #4a2c5a 0%, #d4af37 100%); "
    "color: white; text-align: center; padding: 20px;"
)

_CONFIRMATION_CSS = """
      body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
      .container { max-width: 600px; margin: 0 auto; padding: 20px; }
      .header { background: linear-gradient(135deg, #4a2c5a 0%, #d4af37 100%); color: white; text-align: center; padding: 30px; border-radius: 10px 10px 0 0; }
      .content { background: #fff; padding: 30px; border: 1px solid #ddd; }
      .footer { background: #f8f9fa; padding: 20px; text-align: center; border-radius: 0 0 10px 10px; }
      .order-details { background: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0; }
      .items-table { width: 100%; border-collapse: collapse; margin: 20px 0; }
      .items-table th, .items-table td { padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }
      .total-row { font-size: 18px; font-weight: bold; color: #d4af37; }
      .status-badge { background: #28a745; color: white; padding: 4px 12px; border-radius: 15px; font-size: 12px; }
"""


@dataclass(frozen=True)
class StoreProfile:
    """Branding and contact details printed in every message."""

    name: str = "Herman Perfume"
    website: str = "www.hermanperfume.com"
    contact_phone: str = "+88 01XXXXXXXXX"
    contact_email: str = "support@hermanperfume.com"

    @property
    def tracking_url(self) -> str:
        return f"{self.website}/track"


class MessageComposer:

    def __init__(self, store: StoreProfile | None = None) -> None:
        self._store = store or StoreProfile()

    # --- Confirmation ---------------------------------------------------------

    def confirmation_sms(self, order: Order) -> str:
        return (
            f"{self._store.name}: Your order {order.order_number} has been confirmed! "
            f"Total: {order.totals.total}. We'll call you within 24hrs. "
            f"Track: {self._store.tracking_url}"
        )

    def confirmation_email(self, order: Order) -> EmailMessage:
        store = self._store
        customer = order.customer

        rows = "".join(
            f"<tr><td>{escape(item.name)}</td><td>{item.quantity}</td>"
            f"<td>{item.unit_price}</td><td>{item.line_total}</td></tr>"
            for item in order.items
        )

        payment_lines = [f"<p><strong>Method:</strong> {order.payment.method.label}</p>"]
        if order.payment.transaction_id:
            payment_lines.append(
                f"<p><strong>Transaction ID:</strong> {escape(order.payment.transaction_id)}</p>"
            )
        if order.payment.method is PaymentMethod.COD:
            payment_lines.append("<p><em>You can pay when you receive your order.</em></p>")

        notes_block = ""
        if order.order_notes:
            notes_block = (
                '<div class="order-details"><h4>Your Notes</h4>'
                f'<p><em>"{escape(order.order_notes)}"</em></p></div>'
            )

        html = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Order Confirmation</title>
  <style>{_CONFIRMATION_CSS}</style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>{escape(store.name)}</h1>
      <h2>Order Confirmation</h2>
      <p>Thank you for your order!</p>
    </div>
    <div class="content">
      <h3>Hello {escape(customer.first_name)},</h3>
      <p>We've received your order and are preparing it for delivery. Here are your order details:</p>
      <div class="order-details">
        <h4>Order Information</h4>
        <p><strong>Order Number:</strong> {order.order_number}</p>
        <p><strong>Order Date:</strong> {_long_date(order.created_at)}</p>
        <p><strong>Status:</strong> <span class="status-badge">{order.status.value.upper()}</span></p>
      </div>
      <div class="order-details">
        <h4>Delivery Information</h4>
        <p><strong>Name:</strong> {escape(customer.full_name)}</p>
        <p><strong>Phone:</strong> {escape(customer.phone)}</p>
        <p><strong>Address:</strong> {escape(order.delivery.address)}, {escape(order.delivery.city)}</p>
      </div>
      <h4>Order Items</h4>
      <table class="items-table">
        <thead><tr><th>Product</th><th>Quantity</th><th>Price</th><th>Total</th></tr></thead>
        <tbody>
          {rows}
          <tr><td colspan="3"><strong>Subtotal:</strong></td><td><strong>{order.totals.subtotal}</strong></td></tr>
          <tr><td colspan="3"><strong>Delivery Charge:</strong></td><td><strong>{order.totals.delivery_charge}</strong></td></tr>
          <tr class="total-row"><td colspan="3"><strong>Total Amount:</strong></td><td><strong>{order.totals.total}</strong></td></tr>
        </tbody>
      </table>
      <div class="order-details">
        <h4>Payment Information</h4>
        {"".join(payment_lines)}
      </div>
      <h4>What's Next?</h4>
      <ul>
        <li>We'll call you within 24 hours to confirm your order</li>
        <li>Your order will be prepared and packaged</li>
        <li>We'll notify you when your order is shipped</li>
        <li>Delivery typically takes 2-3 business days</li>
      </ul>
      {notes_block}
    </div>
    {self._footer()}
  </div>
</body>
</html>
"""
        return EmailMessage(
            to=customer.email or "",
            subject=f"Order Confirmation - {order.order_number} | {store.name}",
            html=html,
        )

    # --- Status updates -------------------------------------------------------

    def status_sms(self, order: Order, new_status: str) -> str:
        template = STATUS_SMS.get(new_status)
        body = (
            template.format(number=order.order_number, store=self._store.name)
            if template
            else FALLBACK_STATUS_SMS
        )
        return f"{self._store.name}: {body} Track: {self._store.tracking_url}"

    def status_email(self, order: Order, new_status: str) -> EmailMessage:
        store = self._store
        title = STATUS_TITLES.get(new_status, FALLBACK_STATUS_TITLE)

        extra = ""
        if new_status == "shipped":
            extra = "<p>Your order is on the way! You should receive it within 1-2 business days.</p>"
        elif new_status == "delivered":
            extra = (
                f"<p>Thank you for shopping with {escape(store.name)}! "
                f"We hope you love your new fragrance.</p>"
            )

        html = f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="{_HEADER_STYLE}">
    <h2>{escape(store.name)}</h2>
    <h3>{title}</h3>
  </div>
  <div style="padding: 20px; background: #fff; border: 1px solid #ddd;">
    <p>Hello {escape(order.customer.first_name)},</p>
    <p>Your order <strong>{order.order_number}</strong> status has been updated to: <strong>{escape(new_status.upper())}</strong></p>
    {extra}
    <p>Track your order: <a href="https://{store.tracking_url}">{store.tracking_url}</a></p>
  </div>
</div>
"""
        return EmailMessage(
            to=order.customer.email or "",
            subject=f"{title} - {order.order_number} | {store.name}",
            html=html,
        )

    # --- Diagnostics ----------------------------------------------------------

    def test_email(self, to: str, now: datetime | None = None) -> EmailMessage:
        store = self._store
        sent_at = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        html = f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="{_HEADER_STYLE}">
    <h2>{escape(store.name)}</h2>
    <h3>Email Test Successful!</h3>
  </div>
  <div style="padding: 20px; background: #fff; border: 1px solid #ddd;">
    <p>Congratulations! Your email configuration is working correctly.</p>
    <p>You can now send order confirmations and status updates to your customers.</p>
    <p><strong>Test Date:</strong> {sent_at}</p>
  </div>
</div>
"""
        return EmailMessage(to=to, subject=f"Test Email - {store.name}", html=html)

    # --- Internal helpers -----------------------------------------------------

    def _footer(self) -> str:
        store = self._store
        return f"""<div class="footer">
      <p><strong>Questions?</strong> Contact us:</p>
      <p>Phone: {escape(store.contact_phone)}</p>
      <p>Email: {escape(store.contact_email)}</p>
      <p>Website: {escape(store.website)}</p>
      <hr style="margin: 20px 0;">
      <p style="font-size: 12px; color: #666;">This is an automated email. Please do not reply to this email address.</p>
    </div>"""


def _long_date(moment: datetime) -> str:
    return f"{moment:%B} {moment.day}, {moment.year}"
