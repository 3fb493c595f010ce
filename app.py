#!/usr/bin/env python3

import aws_cdk as cdk

from airline_ticketing_stack import AirlineTicketingStack

app = cdk.App()
AirlineTicketingStack(
    app,
    "AirlineTicketingStack",
    enable_observability=app.node.try_get_context("observability") != "off",
)

app.synth()
