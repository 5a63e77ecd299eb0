"""
Root conftest.py - headless matplotlib for the view tests.
"""
import matplotlib

matplotlib.use("Agg")
