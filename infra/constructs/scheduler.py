from aws_cdk import Duration
from aws_cdk import aws_events as events
from aws_cdk import aws_events_targets as targets
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Scheduler(Construct):
    """Runs the booking hold expiry job every minute"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        expire_holds: _lambda.Function,
    ) -> None:
        super().__init__(scope, id)

        self.expire_holds_rule = events.Rule(
            self,
            "ExpireHoldsSchedule",
            description="Fail PENDING bookings whose seat hold has lapsed",
            schedule=events.Schedule.rate(Duration.minutes(1)),
        )
        self.expire_holds_rule.add_target(
            targets.LambdaFunction(expire_holds, retry_attempts=0)
        )
