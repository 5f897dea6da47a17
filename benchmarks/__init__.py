"""Performance benchmarks for hsdlp.

This package contains timing comparisons of the interior-point solver
backends against the HiGHS solver shipped with SciPy.
"""
