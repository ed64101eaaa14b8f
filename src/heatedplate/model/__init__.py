"""
The MODEL layer contains the plain data of a solve: the solver state and its
persistence. It does not compute anything.
"""
