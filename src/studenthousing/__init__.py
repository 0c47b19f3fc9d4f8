"""
Student Housing Marketplace - Core Package

Listers publish housing listings for students through a REST API; the
Streamlit client lets them search addresses and create listings.
"""

__version__ = "0.1.0"
