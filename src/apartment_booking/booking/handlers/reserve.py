from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.parser import envelopes, parse
from aws_lambda_powertools.utilities.typing import LambdaContext

from apartment_booking.booking.handlers.dependencies import build_admission_engine
from apartment_booking.booking.handlers.errors import (
    CLIENT_ERRORS,
    internal_error_response,
    to_error_response,
)
from apartment_booking.booking.handlers.event_utils import caller_id
from apartment_booking.booking.handlers.request_models import BookingRequestBody
from apartment_booking.booking.handlers.response_models import to_response
from apartment_booking.shared.utils import api_response

logger = Logger()

engine = build_admission_engine()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """POST /bookings"""
    logger.info("Received reserve booking request")

    try:
        guest_id = caller_id(event)
        body = parse(
            event=event.raw_event,
            model=BookingRequestBody,
            envelope=envelopes.ApiGatewayV2Envelope,
        )
        if body is None:
            raise ValueError("Request body is required")
        booking = engine.admit(body.to_domain(guest_id))
        return api_response(201, to_response(booking))

    except CLIENT_ERRORS as e:
        logger.info("Reserve booking request refused", extra={"error": str(e)})
        return to_error_response(e)
    except Exception:
        logger.exception("Failed to reserve booking")
        return internal_error_response()
