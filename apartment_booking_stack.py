from aws_cdk import Stack
from constructs import Construct

from infra.constructs import Api, Database, Functions


class ApartmentBookingStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
        )

        Api(
            self,
            "Api",
            reserve=fns.reserve,
            reschedule=fns.reschedule,
            cancel=fns.cancel,
            get_booking=fns.get_booking,
            list_bookings=fns.list_bookings,
            jwt_issuer=self.node.try_get_context("jwt_issuer")
            or "https://example.auth0.com/",
            jwt_audience=self.node.try_get_context("jwt_audience")
            or "apartment-booking-api",
        )
