from dataclasses import dataclass

import numpy as np


@dataclass
class Transition:
    grid: np.ndarray
    born: np.ndarray
    died: np.ndarray


def stochastic_update(m: np.ndarray, pot, pto, tamount: float, rng: np.random.Generator) -> Transition:
    """
    Simultaneous update of the whole grid from the pre-update snapshot ``m``.
    A cell is offered a transition when tamount >= r1, and takes it when the
    probability for its current state is >= r2.
    """
    r1 = rng.random(m.shape)
    r2 = rng.random(m.shape)
    offered = tamount >= r1
    born = offered & ~m & (pot >= r2)
    died = offered & m & (pto >= r2)
    return Transition(grid=(m | born) & ~died, born=born, died=died)


def step_ca(state, engine, controller, tamount: float) -> Transition:
    """One CA iteration: neighbourhood estimate, transition probabilities, stochastic commit."""
    m = state.m
    activity = engine.activity(m)
    density = engine.density(m)
    pot, pto = controller.step(activity, density)
    tr = stochastic_update(m, pot, pto, tamount, state.rng)
    state.m = tr.grid
    state.t += 1
    return tr
