"""
The CONTROLLER layer holds the numerics: building the initial grid and
relaxing it to the steady state.

Note: Nothing here prints or plots. Progress leaves the solver only through
the per-pass callback.
"""
