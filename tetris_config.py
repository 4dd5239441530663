"""Gameplay defaults and logging setup"""
import logging

CONFIG = {
    "BOARD_WIDTH": 10,
    "BOARD_HEIGHT": 20,
    "CELL_SIZE": 32,
    "FPS": 60,
    "DROP_INTERVAL_MS": 1000,
    "INITIAL_DELAY_MS": 250,
    "REPEAT_RATE_MS": 120,
    "DOWN_REPEAT_RATE_MS": 50,
    "SEED": None,
    "LOG_LEVEL": "WARNING",
}


def setup_logging(level=None):
    level = level or CONFIG["LOG_LEVEL"]
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
