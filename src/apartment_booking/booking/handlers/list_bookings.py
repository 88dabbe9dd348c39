from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from apartment_booking.booking.handlers.dependencies import build_query_service
from apartment_booking.booking.handlers.errors import (
    CLIENT_ERRORS,
    internal_error_response,
    to_error_response,
)
from apartment_booking.booking.handlers.event_utils import caller_id
from apartment_booking.booking.handlers.response_models import to_list_response
from apartment_booking.shared.utils import api_response

logger = Logger()

service = build_query_service()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """GET /bookings?role=guest|host

    Guests get the bookings they made, hosts the bookings on their apartments.
    """
    try:
        user_id = caller_id(event)
        role = (event.query_string_parameters or {}).get("role", "guest")
        logger.info("Listing bookings", extra={"role": role})

        if role == "guest":
            bookings = service.list_for_guest(user_id)
        elif role == "host":
            bookings = service.list_for_host(user_id)
        else:
            raise ValueError(f"Unknown role: {role}")

        return api_response(200, to_list_response(bookings))

    except CLIENT_ERRORS as e:
        return to_error_response(e)
    except Exception:
        logger.exception("Failed to list bookings")
        return internal_error_response()
