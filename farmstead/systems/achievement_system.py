from typing import Dict, List, Optional
from farmstead.core.config_manager import ConfigManager
from farmstead.core.localization import Localization
from farmstead.components.data_components import Inventory
from farmstead.utils.logger import Logger

DEFAULT_THRESHOLDS: Dict[int, str] = {10: "master", 15: "god", 20: "legend"}

class AchievementSystem:
    def __init__(self, config_manager: ConfigManager, localization: Optional[Localization] = None):
        self.config_manager = config_manager
        self.localization = localization or Localization()

    def thresholds(self) -> Dict[int, str]:
        configured = self.config_manager.get("achievements.thresholds")
        if not isinstance(configured, dict):
            return DEFAULT_THRESHOLDS
        # JSON object keys are strings
        thresholds = {}
        for count, suffix in configured.items():
            try:
                thresholds[int(count)] = str(suffix)
            except (TypeError, ValueError):
                Logger.warning(f"Skipping achievement threshold {count!r}: not a whole number")
        return thresholds

    def evaluate(self, crop: str, inventory: Inventory, achievements: List[str]) -> List[str]:
        """Append newly earned titles for crop to achievements; returns the new ones."""
        unlocked = []
        for count, suffix in sorted(self.thresholds().items()):
            title = f"{crop} {suffix}"
            if inventory.count(crop) >= count and title not in achievements:
                achievements.append(title)
                unlocked.append(title)
                Logger.gameplay(self.localization.translate("achievementUnlocked", title=title))
        return unlocked
