from sw.util.misc import format_time

__all__ = ["format_time"]
