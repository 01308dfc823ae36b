from .logger import add_file_handler, configure_logging, get_logger, set_log_level

__all__ = ["add_file_handler", "configure_logging", "get_logger", "set_log_level"]
