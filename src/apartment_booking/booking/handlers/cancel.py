from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from apartment_booking.booking.handlers.dependencies import build_admission_engine
from apartment_booking.booking.handlers.errors import (
    CLIENT_ERRORS,
    internal_error_response,
    to_error_response,
)
from apartment_booking.booking.handlers.event_utils import caller_id, path_booking_id
from apartment_booking.booking.handlers.response_models import to_response
from apartment_booking.shared.utils import api_response

logger = Logger()

engine = build_admission_engine()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """DELETE /bookings/{booking_id}"""
    logger.info("Received cancel booking request")

    try:
        requester_id = caller_id(event)
        booking = engine.cancel(path_booking_id(event), requester_id)
        return api_response(200, to_response(booking))

    except CLIENT_ERRORS as e:
        logger.info("Cancel booking request refused", extra={"error": str(e)})
        return to_error_response(e)
    except Exception:
        logger.exception("Failed to cancel booking")
        return internal_error_response()
