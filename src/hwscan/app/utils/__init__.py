from .logging_setup import get_app_logger, setup_logging
from .network import get_local_ip

__all__ = ["get_app_logger", "get_local_ip", "setup_logging"]
