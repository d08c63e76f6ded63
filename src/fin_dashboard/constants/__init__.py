"""
Application-wide constants
"""


class APP_SETTINGS:
    """FastAPI application metadata"""
    APP_NAME = "Finance Dashboard"
    VERSION = "1.0.0"
    DESCRIPTION = "Weekly financial check-in with calendar overview and an AI finance assistant"
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
