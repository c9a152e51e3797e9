import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as _lambda
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

METRICS_NAMESPACE = "BookingEngine"


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        common_layer: _lambda.LayerVersion,
        stripe_secret: secretsmanager.ISecret,
        stripe_webhook_secret: secretsmanager.ISecret,
        public_base_url: str,
        mail_from_address: str | None = None,
    ) -> None:
        super().__init__(scope, id)

        self._table = table
        self._common_layer = common_layer
        self._base_environment = {
            "TABLE_NAME": table.table_name,
            "PUBLIC_BASE_URL": public_base_url,
            "POWERTOOLS_METRICS_NAMESPACE": METRICS_NAMESPACE,
        }

        self.list_packages = self._create_function(
            "ListPackagesLambda",
            "services.catalog.handlers.list_packages.lambda_handler",
            "catalog-service",
        )
        self.get_package = self._create_function(
            "GetPackageLambda",
            "services.catalog.handlers.get_package.lambda_handler",
            "catalog-service",
        )
        self.get_availability = self._create_function(
            "GetAvailabilityLambda",
            "services.availability.handlers.get_availability.lambda_handler",
            "availability-service",
        )
        self.get_unavailable_dates = self._create_function(
            "GetUnavailableDatesLambda",
            "services.availability.handlers.get_unavailable_dates.lambda_handler",
            "availability-service",
        )
        for fn in [
            self.list_packages,
            self.get_package,
            self.get_availability,
            self.get_unavailable_dates,
        ]:
            table.grant_read_data(fn)

        self.create_checkout = self._create_function(
            "CreateCheckoutLambda",
            "services.booking.handlers.create_checkout.lambda_handler",
            "checkout-service",
            extra_environment={"STRIPE_SECRET_NAME": stripe_secret.secret_name},
            timeout=Duration.seconds(20),
        )
        stripe_secret.grant_read(self.create_checkout)

        webhook_environment = {
            "STRIPE_WEBHOOK_SECRET_NAME": stripe_webhook_secret.secret_name,
        }
        if mail_from_address:
            webhook_environment["MAIL_FROM_ADDRESS"] = mail_from_address
        self.payment_webhook = self._create_function(
            "PaymentWebhookLambda",
            "services.booking.handlers.payment_webhook.lambda_handler",
            "payment-webhook",
            extra_environment=webhook_environment,
            timeout=Duration.seconds(20),
        )
        stripe_webhook_secret.grant_read(self.payment_webhook)
        self.payment_webhook.add_to_role_policy(
            iam.PolicyStatement(actions=["ses:SendEmail"], resources=["*"])
        )

        self.expire_pending = self._create_function(
            "ExpirePendingBookingsLambda",
            "services.booking.handlers.expire_pending.lambda_handler",
            "booking-expiry",
            timeout=Duration.minutes(5),
        )

        self.admin_api = self._create_function(
            "AdminApiLambda",
            "services.admin.handlers.admin_api.lambda_handler",
            "admin-api",
        )

        for fn in [
            self.create_checkout,
            self.payment_webhook,
            self.expire_pending,
            self.admin_api,
        ]:
            table.grant_read_write_data(fn)

        self.all_functions = [
            self.list_packages,
            self.get_package,
            self.get_availability,
            self.get_unavailable_dates,
            self.create_checkout,
            self.payment_webhook,
            self.expire_pending,
            self.admin_api,
        ]

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
        extra_environment: dict[str, str] | None = None,
        timeout: Duration | None = None,
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_14,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._common_layer],
            timeout=timeout or Duration.seconds(10),
            memory_size=512,
            environment={
                **self._base_environment,
                **(extra_environment or {}),
                "POWERTOOLS_SERVICE_NAME": service_name,
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            },
        )
