from aws_cdk import aws_apigatewayv2 as apigwv2
from aws_cdk import aws_lambda as _lambda
from aws_cdk.aws_apigatewayv2_authorizers import HttpJwtAuthorizer
from aws_cdk.aws_apigatewayv2_integrations import HttpLambdaIntegration
from constructs import Construct


class Api(Construct):
    """HTTP API routing booking requests to Lambda

    Callers authenticate with a JWT; the handlers read the ``sub`` claim as
    the guest or host id.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        reserve: _lambda.Function,
        reschedule: _lambda.Function,
        cancel: _lambda.Function,
        get_booking: _lambda.Function,
        list_bookings: _lambda.Function,
        jwt_issuer: str,
        jwt_audience: str,
    ) -> None:
        super().__init__(scope, id)

        authorizer = HttpJwtAuthorizer(
            "BookingJwtAuthorizer",
            jwt_issuer,
            jwt_audience=[jwt_audience],
        )

        self.http_api = apigwv2.HttpApi(
            self,
            "BookingHttpApi",
            api_name="Apartment Booking API",
            default_authorizer=authorizer,
        )

        routes = [
            ("/bookings", apigwv2.HttpMethod.POST, reserve, "Reserve"),
            ("/bookings", apigwv2.HttpMethod.GET, list_bookings, "ListBookings"),
            (
                "/bookings/{booking_id}",
                apigwv2.HttpMethod.GET,
                get_booking,
                "GetBooking",
            ),
            (
                "/bookings/{booking_id}",
                apigwv2.HttpMethod.PUT,
                reschedule,
                "Reschedule",
            ),
            ("/bookings/{booking_id}", apigwv2.HttpMethod.DELETE, cancel, "Cancel"),
        ]
        for path, method, fn, name in routes:
            self.http_api.add_routes(
                path=path,
                methods=[method],
                integration=HttpLambdaIntegration(f"{name}Integration", fn),
            )
