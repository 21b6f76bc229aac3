"""
Harmonic tide prediction for fixed reference stations.

See :mod:`tide_harmonics.prediction` for the prediction core.
"""

__version__ = '0.3.0'
