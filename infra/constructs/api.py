from aws_cdk import aws_apigatewayv2 as apigwv2
from aws_cdk import aws_lambda as _lambda
from aws_cdk.aws_apigatewayv2_authorizers import HttpIamAuthorizer
from aws_cdk.aws_apigatewayv2_integrations import HttpLambdaIntegration
from constructs import Construct


class Api(Construct):
    """API Gateway (HTTP API) Construct

    - ストアフロント向けの公開ルート
    - Stripe Webhook（署名で検証するため認可なし）
    - 管理 API（IAM 認可）
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        list_packages: _lambda.IFunction,
        get_package: _lambda.IFunction,
        get_availability: _lambda.IFunction,
        get_unavailable_dates: _lambda.IFunction,
        create_checkout: _lambda.IFunction,
        payment_webhook: _lambda.IFunction,
        admin_api: _lambda.IFunction,
    ) -> None:
        super().__init__(scope, id)

        self.http_api = apigwv2.HttpApi(
            self,
            "BookingHttpApi",
            api_name="Booking Engine API",
            cors_preflight=apigwv2.CorsPreflightOptions(
                allow_origins=["*"],
                allow_methods=[apigwv2.CorsHttpMethod.GET, apigwv2.CorsHttpMethod.POST],
                allow_headers=["content-type"],
            ),
        )

        public_routes = [
            ("/tenants/{tenant_id}/packages", apigwv2.HttpMethod.GET, list_packages),
            ("/tenants/{tenant_id}/packages/{slug}", apigwv2.HttpMethod.GET, get_package),
            (
                "/tenants/{tenant_id}/availability",
                apigwv2.HttpMethod.GET,
                get_availability,
            ),
            (
                "/tenants/{tenant_id}/availability/unavailable-dates",
                apigwv2.HttpMethod.GET,
                get_unavailable_dates,
            ),
            ("/tenants/{tenant_id}/checkout", apigwv2.HttpMethod.POST, create_checkout),
            ("/webhooks/stripe", apigwv2.HttpMethod.POST, payment_webhook),
        ]
        for index, (path, method, fn) in enumerate(public_routes):
            self.http_api.add_routes(
                path=path,
                methods=[method],
                integration=HttpLambdaIntegration(f"PublicIntegration{index}", fn),
            )

        self.http_api.add_routes(
            path="/admin/{proxy+}",
            methods=[apigwv2.HttpMethod.ANY],
            integration=HttpLambdaIntegration("AdminIntegration", admin_api),
            authorizer=HttpIamAuthorizer(),
        )
