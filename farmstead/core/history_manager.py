from typing import Callable, List, Optional
from farmstead.components.data_components import GameState
from farmstead.core import serialization
from farmstead.core.exceptions import NoSaveFoundError, PersistenceError
from farmstead.core.game_state import FarmState
from farmstead.core.localization import Localization
from farmstead.core.save_store import SaveStore, MemoryStore, AUTOSAVE_KEY, slot_key
from farmstead.utils.logger import Logger, LogCategory

class HistoryManager:
    """
    Undo/redo over full GameState snapshots, plus autosave and save slots.

    Every mutating action runs through perform_action: the current state is
    pushed to the undo stack first and popped back if the action fails, so a
    failed action leaves the live state exactly as it was.
    """
    def __init__(self, state: FarmState, store: Optional[SaveStore] = None,
                 localization: Optional[Localization] = None):
        self.state = state
        self.store = store if store is not None else MemoryStore()
        self.localization = localization or Localization()
        self.undo_stack: List[GameState] = []
        self.redo_stack: List[GameState] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def perform_action(self, action: Callable[[], bool], count_as_action: bool = True) -> bool:
        time_manager = self.state.time_manager
        if count_as_action and not time_manager.has_actions():
            Logger.log(LogCategory.HISTORY, self.localization.translate("noActionsRemaining"))
            return False

        self.undo_stack.append(self.state.snapshot())
        try:
            succeeded = bool(action())
        except Exception:
            self.state.restore(self.undo_stack.pop())
            raise
        self.redo_stack = []

        if succeeded:
            if count_as_action:
                time_manager.spend_action()
        else:
            self.state.restore(self.undo_stack.pop())

        self.autosave()
        return succeeded

    def undo(self) -> bool:
        if not self.undo_stack:
            Logger.log(LogCategory.HISTORY, self.localization.translate("undoUnavailable"))
            return False
        self.redo_stack.append(self.state.snapshot())
        self.state.restore(self.undo_stack.pop())
        self.autosave()
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            Logger.log(LogCategory.HISTORY, self.localization.translate("redoUnavailable"))
            return False
        self.undo_stack.append(self.state.snapshot())
        self.state.restore(self.redo_stack.pop())
        self.autosave()
        return True

    # --- Persistence ---

    def save_data(self) -> serialization.SaveData:
        return serialization.SaveData(
            current_state=self.state.snapshot(),
            undo_stack=list(self.undo_stack),
            redo_stack=list(self.redo_stack),
        )

    def autosave(self):
        try:
            self.store.write(AUTOSAVE_KEY, serialization.dumps(self.save_data()))
        except PersistenceError as e:
            Logger.error(f"Autosave failed: {e}")

    def has_autosave(self) -> bool:
        return self.store.exists(AUTOSAVE_KEY)

    def save_to_slot(self, slot) -> bool:
        try:
            self.store.write(slot_key(slot), serialization.dumps(self.save_data()))
        except PersistenceError as e:
            Logger.error(f"Save to slot {slot} failed: {e}")
            return False
        Logger.log(LogCategory.PERSISTENCE, self.localization.translate("gameSaved", slot=slot))
        return True

    def load_from_slot(self, slot) -> bool:
        try:
            self.restore_save(self.read_save(slot_key(slot)))
        except NoSaveFoundError:
            Logger.log(LogCategory.PERSISTENCE, self.localization.translate("noSaveFound", slot=slot))
            return False
        except PersistenceError as e:
            Logger.error(self.localization.translate("corruptSave", slot=slot, reason=e))
            return False
        Logger.log(LogCategory.PERSISTENCE, self.localization.translate("gameLoaded", slot=slot))
        self.autosave()
        return True

    def load_autosave(self) -> bool:
        try:
            self.restore_save(self.read_save(AUTOSAVE_KEY))
        except PersistenceError as e:
            Logger.error(f"Could not resume from autosave: {e}")
            return False
        Logger.log(LogCategory.PERSISTENCE, self.localization.translate("gameLoadedWithUndoRedo"))
        return True

    def read_save(self, key: str) -> serialization.SaveData:
        """Fetch and validate a payload. Raises NoSaveFoundError or CorruptSaveError."""
        text = self.store.read(key)
        if text is None:
            raise NoSaveFoundError(f"No save data under {key}")
        return serialization.loads(text, len(self.state.grid))

    def restore_save(self, save: serialization.SaveData):
        """Replace the live state and both stacks wholesale."""
        self.state.restore(save.current_state)
        self.undo_stack = list(save.undo_stack)
        self.redo_stack = list(save.redo_stack)
