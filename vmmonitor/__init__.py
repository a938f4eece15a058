"""Data models and controllers for monitoring the host and its virtual machine guests."""

__version__ = "0.1.0"