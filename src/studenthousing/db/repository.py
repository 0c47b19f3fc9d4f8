"""
Repository Pattern for Data Access

Provides CRUD operations for listers and the listings they own.
"""
from typing import List, Optional, Dict, Any, Tuple, Type, TypeVar

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError

from src.studenthousing.db.models import Lister, Listing
from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

LISTER_FIELDS = (
    "name",
    "profile",
    "default_pic",
    "contact_email",
    "contact_phone",
    "preferred_contact",
    "password_hash",
)

LISTING_FIELDS = (
    "distance_from_univ",
    "rent",
    "description",
    "number_of_rooms",
    "number_of_bathrooms",
    "square_foot",
    "address",
    "latitude",
    "longitude",
)


class DuplicateUsernameError(ValueError):
    """Raised when a lister is written with a username that is already taken."""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


class BaseRepository:
    """
    Base repository with common CRUD operations.

    Generic repository that can be extended for specific models.
    """

    def __init__(self, model: Type[T]):
        """
        Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model
        logger.debug("repository_initialized", model=model.__name__)

    def get_by_id(self, session: Session, id_value: Any) -> Optional[T]:
        """
        Get single record by primary key.

        Args:
            session: Database session
            id_value: Primary key value

        Returns:
            Model instance or None
        """
        result = session.get(self.model, id_value)
        logger.debug(
            "repository_get_by_id",
            model=self.model.__name__,
            id=id_value,
            found=result is not None
        )
        return result

    def get_all(self, session: Session, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        """
        Get all records with optional pagination, in primary key order.

        Args:
            session: Database session
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            List of model instances
        """
        query = select(self.model).order_by(self.model.id).offset(offset)
        if limit:
            query = query.limit(limit)

        result = session.execute(query).scalars().all()
        logger.debug(
            "repository_get_all",
            model=self.model.__name__,
            count=len(result),
            limit=limit,
            offset=offset
        )
        return result

    def create(self, session: Session, **kwargs) -> T:
        """
        Create new record.

        Args:
            session: Database session
            **kwargs: Model field values

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        session.flush()
        logger.info("repository_created", model=self.model.__name__, id=getattr(instance, 'id', None))
        return instance

    def update(self, session: Session, id_value: Any, **kwargs) -> Optional[T]:
        """
        Update existing record.

        Args:
            session: Database session
            id_value: Primary key value
            **kwargs: Fields to update

        Returns:
            Updated model instance or None
        """
        instance = self.get_by_id(session, id_value)
        if not instance:
            logger.warning("repository_update_not_found", model=self.model.__name__, id=id_value)
            return None

        for key, value in kwargs.items():
            setattr(instance, key, value)

        session.flush()
        logger.info("repository_updated", model=self.model.__name__, id=id_value)
        return instance

    def delete(self, session: Session, id_value: Any) -> bool:
        """
        Delete record (hard delete).

        Args:
            session: Database session
            id_value: Primary key value

        Returns:
            True if deleted, False if not found
        """
        instance = self.get_by_id(session, id_value)
        if not instance:
            logger.warning("repository_delete_not_found", model=self.model.__name__, id=id_value)
            return False

        session.delete(instance)
        session.flush()
        logger.info("repository_deleted", model=self.model.__name__, id=id_value)
        return True

    def count(self, session: Session) -> int:
        """
        Count total records.

        Args:
            session: Database session

        Returns:
            Total count
        """
        count = session.scalar(select(func.count()).select_from(self.model))
        logger.debug("repository_count", model=self.model.__name__, count=count)
        return count


class ListerRepository(BaseRepository):
    """
    Repository for Lister model and its embedded listings.

    Listings are only reachable through their lister; every listing
    operation takes the parent and a zero-based index.
    """

    def __init__(self):
        super().__init__(Lister)

    def get_by_username(self, session: Session, username: str) -> Optional[Lister]:
        """
        Get lister by username, with listings loaded.

        Args:
            session: Database session
            username: Lister username

        Returns:
            Lister instance or None
        """
        query = (
            select(Lister)
            .options(selectinload(Lister.listings))
            .where(Lister.username == username)
        )
        return session.execute(query).scalars().first()

    def create_lister(self, session: Session, lister_data: Dict[str, Any]) -> Lister:
        """
        Insert a new lister.

        Args:
            session: Database session
            lister_data: Column values (must include username)

        Returns:
            Created Lister

        Raises:
            DuplicateUsernameError: If the username is already taken
        """
        username = lister_data.get("username")
        if not username:
            raise ValueError("username is required")

        try:
            lister = self.create(session, **lister_data)
        except IntegrityError as e:
            session.rollback()
            logger.warning("lister_duplicate_username", username=username, error=str(e.orig))
            raise DuplicateUsernameError(username) from e

        logger.info("lister_created", username=username)
        return lister

    def update_lister(self, session: Session, lister: Lister, changes: Dict[str, Any]) -> Lister:
        """
        Apply profile changes to a lister.

        Unknown keys are ignored so callers can pass a whole schema dump.

        Args:
            session: Database session
            lister: Lister to update
            changes: Column values to set

        Returns:
            Updated Lister
        """
        values = {k: v for k, v in changes.items() if k in LISTER_FIELDS}
        updated = self.update(session, lister.id, **values)
        logger.info("lister_updated", username=lister.username, fields=sorted(values))
        return updated

    def delete_lister(self, session: Session, lister: Lister) -> bool:
        """
        Delete a lister together with all of its listings.

        Args:
            session: Database session
            lister: Lister to delete

        Returns:
            True if deleted
        """
        deleted = self.delete(session, lister.id)
        logger.info("lister_deleted", username=lister.username, deleted=deleted)
        return deleted

    def lock_lister(self, session: Session, lister: Lister) -> Lister:
        """
        Lock a lister's row for the rest of the transaction and reload its listings.

        Listing writes address positions by collection length and index, so
        concurrent writers for the same lister must be serialized on the parent
        row (SELECT ... FOR UPDATE; a no-op on SQLite, which serializes writers
        itself).

        Args:
            session: Database session
            lister: Lister about to have its listings changed

        Returns:
            The same Lister, with current column values
        """
        session.refresh(lister, with_for_update=True)
        session.expire(lister, ["listings"])
        logger.debug("lister_locked", username=lister.username)
        return lister

    def add_listing(self, session: Session, lister: Lister, listing_data: Dict[str, Any]) -> Listing:
        """
        Append a listing to the end of a lister's listings.

        Args:
            session: Database session
            lister: Owning lister
            listing_data: Listing field values

        Returns:
            The new Listing
        """
        listing = Listing(**{k: listing_data[k] for k in LISTING_FIELDS if k in listing_data})
        lister.listings.append(listing)
        session.flush()
        logger.info(
            "listing_added",
            username=lister.username,
            index=listing.position,
            address=listing.address,
        )
        return listing

    def get_listing(self, lister: Lister, index: int) -> Optional[Listing]:
        """
        Get one of a lister's listings by index.

        Args:
            lister: Owning lister
            index: Zero-based position

        Returns:
            Listing or None if the index is out of range
        """
        if index < 0 or index >= len(lister.listings):
            return None
        return lister.listings[index]

    def replace_listing(
        self,
        session: Session,
        lister: Lister,
        index: int,
        listing_data: Dict[str, Any]
    ) -> Optional[Listing]:
        """
        Replace the listing at ``index`` with a new one built from ``listing_data``.

        Args:
            session: Database session
            lister: Owning lister
            index: Zero-based position
            listing_data: Listing field values

        Returns:
            The replacement Listing, or None if the index is out of range
        """
        if self.get_listing(lister, index) is None:
            logger.warning("listing_replace_not_found", username=lister.username, index=index)
            return None

        listing = Listing(**{k: listing_data[k] for k in LISTING_FIELDS if k in listing_data})
        lister.listings[index] = listing
        session.flush()
        logger.info("listing_replaced", username=lister.username, index=index)
        return listing

    def remove_listing(self, session: Session, lister: Lister, index: int) -> bool:
        """
        Remove the listing at ``index``; later listings shift down by one.

        Args:
            session: Database session
            lister: Owning lister
            index: Zero-based position

        Returns:
            True if removed, False if the index is out of range
        """
        if self.get_listing(lister, index) is None:
            logger.warning("listing_remove_not_found", username=lister.username, index=index)
            return False

        lister.listings.pop(index)
        session.flush()
        logger.info("listing_removed", username=lister.username, index=index)
        return True

    def search_listings(
        self,
        session: Session,
        max_rent: Optional[float] = None,
        min_rooms: Optional[float] = None,
        max_distance: Optional[float] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Tuple[str, Listing]]:
        """
        Search listings across all listers.

        Args:
            session: Database session
            max_rent: Maximum monthly rent
            min_rooms: Minimum number of rooms
            max_distance: Maximum distance from the university (miles)
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of (lister username, listing) pairs, ordered by lister then position
        """
        query = select(Lister.username, Listing).join(Listing.lister)

        if max_rent is not None:
            query = query.where(Listing.rent <= max_rent)
        if min_rooms is not None:
            query = query.where(Listing.number_of_rooms >= min_rooms)
        if max_distance is not None:
            query = query.where(Listing.distance_from_univ <= max_distance)

        query = query.order_by(Lister.id, Listing.position).offset(offset)
        if limit:
            query = query.limit(limit)

        rows = [(username, listing) for username, listing in session.execute(query).all()]
        logger.debug(
            "listings_searched",
            count=len(rows),
            max_rent=max_rent,
            min_rooms=min_rooms,
            max_distance=max_distance,
        )
        return rows
