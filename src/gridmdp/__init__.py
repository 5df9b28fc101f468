# Finite-MDP solvers for grid-world and Sokoban maps.

__version__ = "0.1.0"
