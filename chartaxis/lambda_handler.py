"""Lambda handler for the chart axis API using Mangum."""

from mangum import Mangum

from .app import app

# Mangum auto-detects the API Gateway payload version
handler = Mangum(app, lifespan="off")
