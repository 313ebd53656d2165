"""BEAR RUN - an endless runner: jump the logs, stay up past nightfall."""

__version__ = "0.1.0"
