import datetime
from enum import Enum
from typing import Any

class LogCategory(Enum):
    SYSTEM = "SYSTEM"
    GAMEPLAY = "GAMEPLAY"
    GROWTH = "GROWTH"
    HISTORY = "HISTORY"
    PERSISTENCE = "PERSISTENCE"
    CONFIG = "CONFIG"
    ERROR = "ERROR"

class Logger:
    _instance = None
    _time_manager = None
    _debug_enabled = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
        return cls._instance

    @classmethod
    def set_time_manager(cls, time_manager: Any):
        """Injects the TimeManager instance to access the current day."""
        cls._time_manager = time_manager

    @classmethod
    def set_debug(cls, enabled: bool):
        cls._debug_enabled = enabled

    @staticmethod
    def log(category: LogCategory, message: str, day: int = -1):
        """
        Logs a message with format: [Time][Day][Category] Message
        If day is -1 (default), tries to fetch it from TimeManager.
        """
        current_day = day
        if current_day == -1:
            if Logger._time_manager:
                current_day = Logger._time_manager.day
            else:
                current_day = 0

        timestamp = datetime.datetime.now().strftime("%H:%M:%S")
        formatted_msg = f"[{timestamp}][Day:{current_day}][{category.value}] {message}"
        print(formatted_msg)

    @staticmethod
    def info(message: str, day: int = -1):
        Logger.log(LogCategory.SYSTEM, message, day)

    @staticmethod
    def gameplay(message: str, day: int = -1):
        Logger.log(LogCategory.GAMEPLAY, message, day)

    @staticmethod
    def warning(message: str, day: int = -1):
        Logger.log(LogCategory.CONFIG, f"WARNING: {message}", day)

    @staticmethod
    def error(message: str, day: int = -1):
        Logger.log(LogCategory.ERROR, message, day)

    @staticmethod
    def debug(message: str, day: int = -1):
        if Logger._debug_enabled:
            Logger.log(LogCategory.SYSTEM, f"DEBUG: {message}", day)
