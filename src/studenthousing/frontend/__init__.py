"""
Streamlit client for the Student Housing Marketplace.
"""
