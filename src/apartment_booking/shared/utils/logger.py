from aws_lambda_powertools import Logger


def get_logger() -> Logger:
    """Logger shared with the handler that imported the calling module"""
    return Logger(child=True)
