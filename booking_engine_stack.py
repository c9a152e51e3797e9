from aws_cdk import CfnOutput, Stack
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

from infra.constructs import (
    Alarms,
    Api,
    Database,
    Functions,
    Layers,
    Scheduling,
)
from infra.constructs.functions import METRICS_NAMESPACE


class BookingEngineStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        public_base_url = (
            self.node.try_get_context("public_base_url") or "http://localhost:5173"
        )
        mail_from_address = self.node.try_get_context("mail_from_address")

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        # 値はデプロイ後に手動で設定する
        stripe_secret = secretsmanager.Secret(
            self, "StripeSecretKey", secret_name="/booking-engine/stripe-secret-key"
        )
        stripe_webhook_secret = secretsmanager.Secret(
            self,
            "StripeWebhookSecret",
            secret_name="/booking-engine/stripe-webhook-secret",
        )

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            common_layer=layers.common_layer,
            stripe_secret=stripe_secret,
            stripe_webhook_secret=stripe_webhook_secret,
            public_base_url=public_base_url,
            mail_from_address=mail_from_address,
        )

        api = Api(
            self,
            "Api",
            list_packages=fns.list_packages,
            get_package=fns.get_package,
            get_availability=fns.get_availability,
            get_unavailable_dates=fns.get_unavailable_dates,
            create_checkout=fns.create_checkout,
            payment_webhook=fns.payment_webhook,
            admin_api=fns.admin_api,
        )

        Scheduling(self, "Scheduling", expire_pending=fns.expire_pending)
        Alarms(self, "Alarms", metrics_namespace=METRICS_NAMESPACE)

        CfnOutput(self, "ApiUrl", value=api.http_api.api_endpoint)
