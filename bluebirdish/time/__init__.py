from .delay import delay, delay_value

__all__ = ("delay", "delay_value")
