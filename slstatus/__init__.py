"""Status monitor that collects Linux system information into a single status line."""

__version__ = "1.1"