"""
SQLAlchemy ORM Models

A Lister owns an ordered collection of Listings. Listings have no identity
outside their parent: they are addressed by (lister username, position), and
the surrogate key on the listings table is never exposed.
"""
from typing import Any, Dict, Optional

from sqlalchemy import (
    String, Integer, Float, Text, ForeignKey, CheckConstraint, Index, Enum as SQLEnum
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.studenthousing.db.base import Base, TimestampMixin

CONTACT_METHODS = ("email", "phone")


class Lister(Base, TimestampMixin):
    """
    Account of a person who posts housing listings.

    ``username`` is the external identifier used in every API path.
    """
    __tablename__ = "listers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Unique public identifier (trimmed)"
    )
    password_hash: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Bcrypt hash; listers without a password cannot sign in"
    )
    profile: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    default_pic: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    # contactInfo sub-object
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    preferred_contact: Mapped[str] = mapped_column(
        SQLEnum(*CONTACT_METHODS, name="preferred_contact_method"),
        nullable=False,
        default="email",
        server_default="email",
    )

    listings: Mapped[list["Listing"]] = relationship(
        "Listing",
        back_populates="lister",
        order_by="Listing.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    @property
    def contact_info(self) -> Dict[str, Any]:
        """Nested contact block as exposed by the API."""
        return {
            "email": self.contact_email,
            "phone": self.contact_phone,
            "preferred_contact": self.preferred_contact,
        }

    def __repr__(self) -> str:
        return f"<Lister(username={self.username}, listings={len(self.listings)})>"


class Listing(Base):
    """A single advertised housing unit, owned by exactly one Lister."""
    __tablename__ = "listings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lister_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("listers.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Index within the parent lister's listings"
    )

    distance_from_univ: Mapped[float] = mapped_column(Float, nullable=False, comment="Miles")
    rent: Mapped[float] = mapped_column(Float, nullable=False, comment="Monthly rent (USD)")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    number_of_rooms: Mapped[float] = mapped_column(Float, nullable=False)
    number_of_bathrooms: Mapped[float] = mapped_column(Float, nullable=False)
    square_foot: Mapped[float] = mapped_column(Float, nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    lister: Mapped["Lister"] = relationship("Lister", back_populates="listings")

    __table_args__ = (
        CheckConstraint(
            "latitude >= -90 AND latitude <= 90",
            name="check_listing_latitude_range"
        ),
        CheckConstraint(
            "longitude >= -180 AND longitude <= 180",
            name="check_listing_longitude_range"
        ),
        Index("idx_listings_lister_position", "lister_id", "position"),
        Index("idx_listings_rent", "rent"),
    )

    def __repr__(self) -> str:
        return f"<Listing(lister_id={self.lister_id}, position={self.position}, address={self.address})>"
