class System:
    """Base class for systems run once per day-advance."""
    def update(self):
        raise NotImplementedError
