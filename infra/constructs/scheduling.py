from aws_cdk import Duration
from aws_cdk import aws_events as events
from aws_cdk import aws_events_targets as targets
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Scheduling(Construct):
    """支払い待ち予約の期限切れ処理を定期実行する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        expire_pending: _lambda.IFunction,
        interval: Duration | None = None,
    ) -> None:
        super().__init__(scope, id)

        self.rule = events.Rule(
            self,
            "ExpirePendingBookingsSchedule",
            schedule=events.Schedule.rate(interval or Duration.minutes(15)),
            targets=[targets.LambdaFunction(expire_pending)],
        )
