"""
Seed Demo Data

Loads a few listers and listings around campus for local demos.
"""
import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.studenthousing.api.auth import get_password_hash
from src.studenthousing.db.repository import DuplicateUsernameError, ListerRepository
from src.studenthousing.db.session import get_db_session
from src.studenthousing.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

DEMO_PASSWORD = "secret"

DEMO_LISTERS = [
    {
        "username": "alice",
        "name": "Alice Chen",
        "contact_email": "alice@example.com",
        "contact_phone": "617-555-0101",
        "preferred_contact": "phone",
        "listings": [
            {
                "distance_from_univ": 0.5,
                "rent": 1200,
                "description": "Nice place",
                "number_of_rooms": 2,
                "number_of_bathrooms": 1.5,
                "square_foot": 800,
                "address": "123 Main St",
                "latitude": 42.34,
                "longitude": -71.09,
            },
        ],
    },
    {
        "username": "bob",
        "name": "Bob Rivera",
        "contact_email": "bob@example.com",
        "listings": [
            {
                "distance_from_univ": 1.2,
                "rent": 950,
                "description": "Room in shared apartment, utilities included",
                "number_of_rooms": 1,
                "number_of_bathrooms": 1,
                "square_foot": 350,
                "address": "45 Hemenway St, Boston, MA",
                "latitude": 42.3445,
                "longitude": -71.0895,
            },
            {
                "distance_from_univ": 2.0,
                "rent": 2600,
                "description": "Three bedroom near the T",
                "number_of_rooms": 3,
                "number_of_bathrooms": 2,
                "square_foot": 1250,
                "address": "300 Centre St, Jamaica Plain, MA",
                "latitude": 42.3216,
                "longitude": -71.1003,
            },
        ],
    },
]


def main():
    """Insert demo listers that do not exist yet."""
    setup_logging()
    repo = ListerRepository()

    for demo in DEMO_LISTERS:
        lister_data = {k: v for k, v in demo.items() if k != "listings"}
        lister_data["password_hash"] = get_password_hash(DEMO_PASSWORD)

        with get_db_session() as session:
            if repo.get_by_username(session, demo["username"]):
                logger.info("demo_lister_exists", username=demo["username"])
                continue
            try:
                lister = repo.create_lister(session, lister_data)
            except DuplicateUsernameError:
                continue
            for listing in demo["listings"]:
                repo.add_listing(session, lister, listing)

        logger.info("demo_lister_seeded", username=demo["username"], listings=len(demo["listings"]))


if __name__ == "__main__":
    main()
