from aws_cdk import Stack
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

# Powertools for AWS Lambda (Python) v3 public layer; bundles pydantic
POWERTOOLS_LAYER_ARN = (
    "arn:aws:lambda:{region}:017000801446:layer:"
    "AWSLambdaPowertoolsPythonV3-python313-x86_64:7"
)


class Functions(Construct):
    """Lambda functions behind the booking API"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
    ) -> None:
        super().__init__(scope, id)

        self._powertools_layer = _lambda.LayerVersion.from_layer_version_arn(
            self,
            "PowertoolsLayer",
            POWERTOOLS_LAYER_ARN.format(region=Stack.of(self).region),
        )

        self.reserve = self._create_function(
            "ReserveBookingLambda",
            "apartment_booking.booking.handlers.reserve.lambda_handler",
            table,
        )

        self.reschedule = self._create_function(
            "RescheduleBookingLambda",
            "apartment_booking.booking.handlers.reschedule.lambda_handler",
            table,
        )

        self.cancel = self._create_function(
            "CancelBookingLambda",
            "apartment_booking.booking.handlers.cancel.lambda_handler",
            table,
        )

        for fn in [self.reserve, self.reschedule, self.cancel]:
            table.grant_read_write_data(fn)

        self.get_booking = self._create_function(
            "GetBookingLambda",
            "apartment_booking.booking.handlers.get_booking.lambda_handler",
            table,
        )

        self.list_bookings = self._create_function(
            "ListBookingsLambda",
            "apartment_booking.booking.handlers.list_bookings.lambda_handler",
            table,
        )

        table.grant_read_data(self.get_booking)
        table.grant_read_data(self.list_bookings)

    def _create_function(
        self,
        id: str,
        handler: str,
        table: dynamodb.Table,
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_13,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._powertools_layer],
            environment={
                "TABLE_NAME": table.table_name,
                "POWERTOOLS_SERVICE_NAME": "booking-service",
                "BOOKING_CANCELLATION_WINDOW_HOURS": "48",
                "BOOKING_MAX_ADVANCE_DAYS": "180",
                "BOOKING_ADMISSION_ATTEMPTS": "3",
            },
        )
