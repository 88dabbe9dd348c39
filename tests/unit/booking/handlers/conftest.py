import json
from dataclasses import dataclass

import pytest

from apartment_booking.booking.applications import BookingQueryService


@pytest.fixture
def lambda_context():
    @dataclass
    class LambdaContext:
        function_name: str = "booking-test"
        memory_limit_in_mb: int = 256
        invoked_function_arn: str = (
            "arn:aws:lambda:us-east-1:123456789012:function:booking-test"
        )
        aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"

    return LambdaContext()


@pytest.fixture
def make_event():
    """API Gateway HTTP API (payload v2) event factory"""

    def _factory(
        method: str = "POST",
        path: str = "/bookings",
        body: dict | None = None,
        caller: str | None = "guest-1",
        path_parameters: dict | None = None,
        query: dict | None = None,
    ) -> dict:
        request_context: dict = {
            "accountId": "123456789012",
            "apiId": "api-id",
            "domainName": "api-id.execute-api.us-east-1.amazonaws.com",
            "domainPrefix": "api-id",
            "requestId": "JKJaXmPLvHcESHA=",
            "routeKey": f"{method} {path}",
            "stage": "$default",
            "time": "01/Mar/2026:09:00:00 +0000",
            "timeEpoch": 1772355600000,
            "http": {
                "method": method,
                "path": path,
                "protocol": "HTTP/1.1",
                "sourceIp": "192.0.2.1",
                "userAgent": "pytest",
            },
        }
        if caller is not None:
            request_context["authorizer"] = {"jwt": {"claims": {"sub": caller}}}
        event = {
            "version": "2.0",
            "routeKey": f"{method} {path}",
            "rawPath": path,
            "rawQueryString": "",
            "headers": {"content-type": "application/json"},
            "requestContext": request_context,
            "isBase64Encoded": False,
        }
        if body is not None:
            event["body"] = json.dumps(body)
        if path_parameters is not None:
            event["pathParameters"] = path_parameters
        if query is not None:
            event["queryStringParameters"] = query
        return event

    return _factory


@pytest.fixture
def booking_body(day):
    def _factory(start: int = 3, end: int = 5, guest_count: int = 2, **extra) -> dict:
        return {
            "apartment_id": "apt-1",
            "start_date": day(start).isoformat(),
            "end_date": day(end).isoformat(),
            "guest_count": guest_count,
            **extra,
        }

    return _factory


@pytest.fixture
def query_service(booking_repository):
    return BookingQueryService(repository=booking_repository)
