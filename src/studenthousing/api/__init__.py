"""
FastAPI REST API for the Student Housing Marketplace

Provides REST endpoints for the Streamlit client:
- Lister registration, profiles and sign-in
- Listings embedded in each lister (append, replace, remove by index)
- Marketplace overview of all listings
- Health checks
"""
