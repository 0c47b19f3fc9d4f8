"""
Student Housing Marketplace

Backend API, persistence layer and Streamlit client for a student housing
listing marketplace.
"""

__version__ = "0.1.0"
