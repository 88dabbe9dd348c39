import os

# Lambda handler modules build their DynamoDB resources at import time
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("TABLE_NAME", "booking-table-test")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "booking-service")
