#!/usr/bin/env python3

import aws_cdk as cdk

from apartment_booking_stack import ApartmentBookingStack

app = cdk.App()
ApartmentBookingStack(
    app,
    "ApartmentBookingStack",
)

app.synth()
