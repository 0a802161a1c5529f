DEFAULT_ACTIONS_PER_DAY = 10

class TimeManager:
    """Calendar of the farm: current day and the per-day action budget."""
    def __init__(self, start_day: int = 1, actions_per_day: int = DEFAULT_ACTIONS_PER_DAY,
                 actions_remaining: int = None):
        self.day = start_day
        self.actions_per_day = actions_per_day
        self.actions_remaining = actions_per_day if actions_remaining is None else actions_remaining

    def next_day(self):
        self.day += 1
        self.actions_remaining = self.actions_per_day

    def has_actions(self) -> bool:
        return self.actions_remaining > 0

    def spend_action(self):
        self.actions_remaining = max(0, self.actions_remaining - 1)
