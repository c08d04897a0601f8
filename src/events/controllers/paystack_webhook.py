from django.http import HttpRequest
from ninja_extra import api_controller, route

from events import schema
from events.service import paystack_webhooks


@api_controller("/payments", auth=None, tags=["Payments"])
class PaystackWebhookController:
    @route.post("/webhook", url_name="paystack_webhook", response={200: schema.WebhookAckSchema})
    def handle_webhook(self, request: HttpRequest) -> tuple[int, schema.WebhookAckSchema]:
        """Handle incoming Paystack webhooks."""
        payload = paystack_webhooks.parse_webhook(request.body, request.headers.get("x-paystack-signature"))

        paystack_webhooks.PaystackEventHandler(payload).handle()

        return 200, schema.WebhookAckSchema()
