"""Sort images into directories by orientation: tall, wide, and square."""

__version__ = "0.3.0"
