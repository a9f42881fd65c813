"""Advance git submodules to their latest remote commit or tag and report the results to GitHub Actions."""

__version__ = '1.0.0'
