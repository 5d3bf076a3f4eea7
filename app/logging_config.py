"""
Logging setup
"""
import logging

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def resolve_level(level: str) -> int:
    """Unknown level names fall back to INFO"""
    return _LEVELS.get((level or "").upper(), logging.INFO)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
