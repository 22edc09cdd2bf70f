"""AWS Lambda entry points.

`lambda_handler` takes API Gateway REST (v1) proxy events and drives the
dispatcher directly. `handler` wraps the FastAPI app with Mangum for
HTTP API (v2) deployments.
"""

import asyncio

from mangum import Mangum

from src.api.dispatcher import handle_event
from src.logging.audit import setup_logging
from src.main import app

# Lifespan is off under Mangum, so configure logging at cold start
setup_logging()

handler = Mangum(app, lifespan="off")


def lambda_handler(event, context):
    return asyncio.run(handle_event(event))
