
class NoOpObserver:
    def notify(self, state):
        pass

class FrameObserver:
    """Hands a copy of the grid to ``callback(t, m)`` every ``every`` iterations."""
    def __init__(self, callback, every=20):
        self.callback = callback; self.every = every
    def notify(self, state):
        if state.t % self.every == 0:
            self.callback(state.t, state.m.copy())

class ProgressObserver:
    def __init__(self, total, every=1000, prefix='sim'):
        self.total = total; self.every = every; self.prefix = prefix
    def notify(self, state):
        if state.t % self.every == 0 or state.t == self.total:
            print(f"[{self.prefix}] {state.t}/{self.total} cover={state.cover():.4f}", flush=True)
