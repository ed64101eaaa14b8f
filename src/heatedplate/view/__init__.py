"""
The VIEW layer turns solved grids into figures. It only reads results.
"""
