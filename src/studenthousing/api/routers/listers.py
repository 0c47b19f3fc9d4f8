"""
Listers Router

Endpoints for lister profiles and the listings each lister owns.

Listings have no identifier of their own: they are addressed by the owning
lister's username and their zero-based index in that lister's list.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from src.studenthousing.api.auth import get_current_lister, get_password_hash, require_owner
from src.studenthousing.api.dependencies import get_db
from src.studenthousing.api.schemas import (
    ListerCreate,
    ListerRead,
    ListerSummary,
    ListerUpdate,
    ListingCreate,
    ListingOverviewItem,
    ListingRead,
    MessageResponse,
)
from src.studenthousing.db.models import Lister
from src.studenthousing.db.repository import DuplicateUsernameError, ListerRepository
from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/listers", tags=["listers"])

repo = ListerRepository()


def _get_lister_or_404(db: Session, username: str) -> Lister:
    lister = repo.get_by_username(db, username)
    if lister is None:
        raise HTTPException(status_code=404, detail=f"Lister not found: {username}")
    return lister


def _listing_not_found(username: str, index: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Listing {index} not found for lister {username}")


def _contact_columns(contact_info: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "contact_email": contact_info["email"],
        "contact_phone": contact_info.get("phone"),
        "preferred_contact": contact_info.get("preferred_contact") or "email",
    }


@router.post("/listers", response_model=ListerRead, status_code=status.HTTP_201_CREATED)
def register_lister(payload: ListerCreate, db: Session = Depends(get_db)):
    """
    Register a new lister, optionally with initial listings.

    Args:
        payload: Lister profile, contact info and optional password
        db: Database session

    Returns:
        The created lister

    Raises:
        HTTPException: 409 if the username is already taken
    """
    lister_data = {
        "username": payload.username,
        "password_hash": get_password_hash(payload.password) if payload.password else None,
        "name": payload.name,
        "profile": payload.profile,
        "default_pic": payload.default_pic,
        **_contact_columns(payload.contact_info.model_dump()),
    }

    try:
        lister = repo.create_lister(db, lister_data)
    except DuplicateUsernameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    for listing in payload.listings:
        repo.add_listing(db, lister, listing.model_dump())

    db.commit()
    return lister


@router.get("/listers", response_model=List[ListerSummary])
def list_listers(
    limit: int = Query(100, ge=1, le=1000, description="Number of results to return"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
    db: Session = Depends(get_db),
):
    """
    List listers with their listing counts.
    """
    listers = repo.get_all(db, limit=limit, offset=offset)
    return [
        ListerSummary(
            username=lister.username,
            name=lister.name,
            default_pic=lister.default_pic,
            listing_count=len(lister.listings),
        )
        for lister in listers
    ]


@router.get("/listers/{username}", response_model=ListerRead)
def get_lister(username: str, db: Session = Depends(get_db)):
    """
    Get a lister's profile and listings.

    Raises:
        HTTPException: 404 if the lister does not exist
    """
    return _get_lister_or_404(db, username)


@router.put("/listers/{username}", response_model=ListerRead)
def update_lister(
    username: str,
    payload: ListerUpdate,
    db: Session = Depends(get_db),
    current_lister: Lister = Depends(get_current_lister),
):
    """
    Update a lister's profile. Only the lister itself may do this.

    Fields omitted from the body keep their current values.
    """
    require_owner(username, current_lister)

    changes = payload.model_dump(exclude_unset=True)
    columns: Dict[str, Any] = {
        key: changes[key] for key in ("name", "profile", "default_pic") if key in changes
    }
    if changes.get("contact_info") is not None:
        columns.update(_contact_columns(changes["contact_info"]))
    if changes.get("password"):
        columns["password_hash"] = get_password_hash(changes["password"])
    if "name" in columns and not columns["name"]:
        raise HTTPException(status_code=400, detail="name is required")

    lister = repo.update_lister(db, current_lister, columns)
    db.commit()
    return lister


@router.delete("/listers/{username}", response_model=MessageResponse)
def delete_lister(
    username: str,
    db: Session = Depends(get_db),
    current_lister: Lister = Depends(get_current_lister),
):
    """
    Delete a lister and every listing it owns. Only the lister itself may do this.
    """
    require_owner(username, current_lister)
    repo.delete_lister(db, current_lister)
    db.commit()
    return {"message": f"Lister {username} deleted"}


@router.get("/listers/{username}/listings", response_model=List[ListingRead])
def list_lister_listings(username: str, db: Session = Depends(get_db)):
    """
    Get a lister's listings in display order.
    """
    return _get_lister_or_404(db, username).listings


@router.post(
    "/listers/{username}/listings",
    response_model=ListingRead,
    status_code=status.HTTP_201_CREATED,
)
def create_listing(
    username: str,
    payload: ListingCreate,
    db: Session = Depends(get_db),
    current_lister: Lister = Depends(get_current_lister),
):
    """
    Append a listing to a lister's listings.

    Args:
        username: Owning lister (must match the token subject)
        payload: Listing fields
        db: Database session
        current_lister: Authenticated lister

    Returns:
        The stored listing
    """
    require_owner(username, current_lister)
    repo.lock_lister(db, current_lister)
    listing = repo.add_listing(db, current_lister, payload.model_dump())
    db.commit()
    return listing


@router.get("/listers/{username}/listings/{index}", response_model=ListingRead)
def get_listing(username: str, index: int, db: Session = Depends(get_db)):
    """
    Get the listing at ``index`` of a lister's listings.
    """
    listing = repo.get_listing(_get_lister_or_404(db, username), index)
    if listing is None:
        raise _listing_not_found(username, index)
    return listing


@router.put("/listers/{username}/listings/{index}", response_model=ListingRead)
def replace_listing(
    username: str,
    index: int,
    payload: ListingCreate,
    db: Session = Depends(get_db),
    current_lister: Lister = Depends(get_current_lister),
):
    """
    Replace the listing at ``index`` with the request body.
    """
    require_owner(username, current_lister)
    repo.lock_lister(db, current_lister)
    listing = repo.replace_listing(db, current_lister, index, payload.model_dump())
    if listing is None:
        raise _listing_not_found(username, index)
    db.commit()
    return listing


@router.delete("/listers/{username}/listings/{index}", response_model=MessageResponse)
def delete_listing(
    username: str,
    index: int,
    db: Session = Depends(get_db),
    current_lister: Lister = Depends(get_current_lister),
):
    """
    Remove the listing at ``index``. Later listings move up one position.
    """
    require_owner(username, current_lister)
    repo.lock_lister(db, current_lister)
    if not repo.remove_listing(db, current_lister, index):
        raise _listing_not_found(username, index)
    db.commit()
    return {"message": f"Listing {index} removed"}


@router.get("/listings", response_model=List[ListingOverviewItem])
def list_all_listings(
    max_rent: Optional[float] = Query(None, alias="maxRent", ge=0, description="Maximum monthly rent"),
    min_rooms: Optional[float] = Query(None, alias="minRooms", ge=0, description="Minimum number of rooms"),
    max_distance: Optional[float] = Query(
        None, alias="maxDistance", ge=0, description="Maximum distance from the university (miles)"
    ),
    limit: int = Query(100, ge=1, le=1000, description="Number of results to return"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
    db: Session = Depends(get_db),
):
    """
    Marketplace overview: listings from every lister, with optional filters.
    """
    rows = repo.search_listings(
        db,
        max_rent=max_rent,
        min_rooms=min_rooms,
        max_distance=max_distance,
        limit=limit,
        offset=offset,
    )
    return [
        ListingOverviewItem(
            **ListingRead.model_validate(listing).model_dump(),
            lister_username=username,
            index=listing.position,
        )
        for username, listing in rows
    ]
