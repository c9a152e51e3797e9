from aws_cdk import Duration
from aws_cdk import aws_cloudwatch as cloudwatch
from aws_cdk import aws_cloudwatch_actions as cw_actions
from aws_cdk import aws_sns as sns
from constructs import Construct


class Alarms(Construct):
    """手動照合が必要な決済 Webhook を通知するアラーム

    - WebhookConflict: 支払われたが予約を確定できなかった
    - UnknownWebhookSession: 予約・テナントに紐付かない通知
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        metrics_namespace: str,
        webhook_service_name: str = "payment-webhook",
    ) -> None:
        super().__init__(scope, id)

        self.topic = sns.Topic(self, "ReconciliationTopic")

        self.webhook_conflict_alarm = self._reconciliation_alarm(
            "WebhookConflictAlarm",
            metrics_namespace,
            webhook_service_name,
            metric_name="WebhookConflict",
            description=(
                "A payment succeeded for a booking that could not be confirmed; "
                "reconcile manually"
            ),
        )
        self.unknown_session_alarm = self._reconciliation_alarm(
            "UnknownWebhookSessionAlarm",
            metrics_namespace,
            webhook_service_name,
            metric_name="UnknownWebhookSession",
            description=(
                "A payment webhook matched no booking or tenant; reconcile manually"
            ),
        )

    def _reconciliation_alarm(
        self,
        id: str,
        metrics_namespace: str,
        service_name: str,
        metric_name: str,
        description: str,
    ) -> cloudwatch.Alarm:
        metric = cloudwatch.Metric(
            namespace=metrics_namespace,
            metric_name=metric_name,
            dimensions_map={"service": service_name},
            statistic="Sum",
            period=Duration.minutes(5),
        )
        alarm = cloudwatch.Alarm(
            self,
            id,
            metric=metric,
            threshold=1,
            evaluation_periods=1,
            comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_OR_EQUAL_TO_THRESHOLD,
            treat_missing_data=cloudwatch.TreatMissingData.NOT_BREACHING,
            alarm_description=description,
        )
        alarm.add_alarm_action(cw_actions.SnsAction(self.topic))
        return alarm
