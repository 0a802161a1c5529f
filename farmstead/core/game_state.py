from typing import List, Optional, Tuple
from farmstead.components.data_components import GameState, Inventory
from farmstead.core.time_manager import TimeManager
from farmstead.world.grid import Grid

class FarmState:
    """
    The single live game state. Components mutate it in place; history works
    on immutable GameState snapshots taken from it.
    """
    def __init__(self, grid: Grid, time_manager: TimeManager, inventory: Optional[Inventory] = None,
                 achievements: Optional[List[str]] = None, player_pos: Optional[Tuple[int, int]] = None):
        self.grid = grid
        self.time_manager = time_manager
        self.inventory = inventory or Inventory()
        self.achievements: List[str] = list(achievements or [])
        if player_pos is None:
            player_pos = (grid.cols // 2, grid.rows // 2)
        self.player_x, self.player_y = player_pos

    def active_tile(self) -> Optional[Tuple[int, int]]:
        """(row, col) under the player, or None when the player is off the grid."""
        if self.grid.in_bounds(self.player_y, self.player_x):
            return self.player_y, self.player_x
        return None

    def snapshot(self) -> GameState:
        return GameState(
            day_count=self.time_manager.day,
            inventory=self.inventory.to_dict(),
            achievements=list(self.achievements),
            grid_data=self.grid.clone_all(),
            player_x=self.player_x,
            player_y=self.player_y,
            actions_remaining=self.time_manager.actions_remaining,
        )

    def restore(self, state: GameState):
        # Grid first: it is the only step that can reject a snapshot.
        self.grid.restore_all(state.grid_data)
        self.time_manager.day = state.day_count
        self.time_manager.actions_remaining = state.actions_remaining
        self.inventory = Inventory(items=dict(state.inventory))
        self.achievements = list(state.achievements)
        self.player_x = state.player_x
        self.player_y = state.player_y
