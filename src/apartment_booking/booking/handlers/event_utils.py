from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEventV2

from apartment_booking.booking.domain.value_object import BookingId
from apartment_booking.shared.domain import UserId


class UnauthorizedRequestError(Exception):
    """No caller identity on the request"""

    pass


def caller_id(event: APIGatewayProxyEventV2) -> UserId:
    """Caller id from the JWT ``sub`` claim set by the API Gateway authorizer"""
    claims = (
        event.raw_event.get("requestContext", {})
        .get("authorizer", {})
        .get("jwt", {})
        .get("claims", {})
    )
    subject = claims.get("sub")
    if not subject:
        raise UnauthorizedRequestError("Missing caller identity")
    return UserId(value=subject)


def path_booking_id(event: APIGatewayProxyEventV2) -> BookingId:
    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        raise ValueError("booking_id is required")
    return BookingId(value=booking_id)
