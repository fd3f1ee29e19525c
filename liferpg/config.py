"""Configuration management"""
import os
import logging
from dotenv import load_dotenv

from liferpg.exceptions import ConfigurationError

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Time
# "Today" for period and missed-task calculations is resolved in this zone
DEFAULT_TIMEZONE: str = os.getenv("LIFERPG_TIMEZONE", "UTC")

# Daily task targets for new players
DEFAULT_DAILY_MIN: int = int(os.getenv("LIFERPG_DAILY_MIN", "3"))
DEFAULT_DAILY_MAX: int = int(os.getenv("LIFERPG_DAILY_MAX", "5"))

# Quests
# When true, abandoning a staked quest also deducts the stake from current XP.
# Default policy: the stake is only forgone.
QUEST_FAIL_DEDUCTS_BET: bool = os.getenv("QUEST_FAIL_DEDUCTS_BET", "false").lower() == "true"
MIN_CUSTOM_QUEST_TASKS: int = int(os.getenv("MIN_CUSTOM_QUEST_TASKS", "5"))
CUSTOM_QUEST_XP_PER_TASK: int = int(os.getenv("CUSTOM_QUEST_XP_PER_TASK", "10"))


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if LOG_LEVEL.upper() not in logging.getLevelNamesMapping():
        raise ConfigurationError(f"Unknown LOG_LEVEL '{LOG_LEVEL}'", config_key="LOG_LEVEL")
    if DEFAULT_DAILY_MIN < 0:
        raise ConfigurationError("LIFERPG_DAILY_MIN must not be negative", config_key="LIFERPG_DAILY_MIN")
    if DEFAULT_DAILY_MAX < DEFAULT_DAILY_MIN:
        raise ConfigurationError(
            "LIFERPG_DAILY_MAX must be at least LIFERPG_DAILY_MIN",
            config_key="LIFERPG_DAILY_MAX"
        )
    if MIN_CUSTOM_QUEST_TASKS < 1:
        raise ConfigurationError("MIN_CUSTOM_QUEST_TASKS must be positive", config_key="MIN_CUSTOM_QUEST_TASKS")
    if CUSTOM_QUEST_XP_PER_TASK < 0:
        raise ConfigurationError(
            "CUSTOM_QUEST_XP_PER_TASK must not be negative",
            config_key="CUSTOM_QUEST_XP_PER_TASK"
        )


def configure_logging() -> None:
    """Configure root logging for host applications embedding the engine"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    )
