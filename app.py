#!/usr/bin/env python3

import aws_cdk as cdk

from booking_engine_stack import BookingEngineStack

app = cdk.App()
BookingEngineStack(
    app,
    "BookingEngineStack",
)

app.synth()
