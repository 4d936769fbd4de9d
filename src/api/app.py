from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Depends, Path, Response, status
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging
import os
from typing import Annotated, List

from src.db.database import get_db, create_tables, CampsiteTypeDB, CampsiteDB, UserProfileDB, ReservationDB
from src.db.seed import seed_database
from src.models.campsite import MAX_ID, CampsiteType, CampsiteIn, Campsite, CampsiteDetail
from src.models.reservation import ReservationIn, Reservation
from src.api.error_handlers import register_error_handlers

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

INVALID_DATA_MESSAGE = "Invalid data submitted"
CHECKOUT_BEFORE_CHECKIN_MESSAGE = "Reservation checkout must be at least one day after checkin"
TOO_LONG_MESSAGE = "Reservation exceeds maximum reservation days for this campsite type"

# Out-of-range ids fail validation instead of reaching the database
PathId = Annotated[int, Path(ge=1, le=MAX_ID)]

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    if os.getenv("SEED_DATABASE", "true").lower() != "false":
        inserted = seed_database()
        logger.info(f"Seed complete: {inserted} rows inserted")
    logger.info("Creek River API started")
    yield
    logger.info("Creek River API shutting down")

app = FastAPI(
    title="Creek River Campground API",
    description="Campsite and reservation management for Creek River campground",
    version="1.0.0",
    lifespan=lifespan
)
register_error_handlers(app)

def _reservation_query(db):
    return db.query(ReservationDB).options(
        joinedload(ReservationDB.user_profile),
        joinedload(ReservationDB.campsite).joinedload(CampsiteDB.campsite_type)
    )

def _commit(db, action):
    """Commit the session, turning database failures into HTTP errors."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error while trying to {action}: {str(e.orig)}")
        raise HTTPException(status_code=400, detail=INVALID_DATA_MESSAGE)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {str(e)}")
        raise HTTPException(status_code=500, detail="Database error")

@app.get("/")
def read_root():
    return {"message": "Welcome to the Creek River Campground API"}

@app.get("/api/campsitetypes", response_model=List[CampsiteType])
def get_campsite_types(db: Session = Depends(get_db)):
    return db.query(CampsiteTypeDB).order_by(CampsiteTypeDB.id).all()

@app.get("/api/campsites", response_model=List[Campsite])
def get_campsites(db: Session = Depends(get_db)):
    return db.query(CampsiteDB).order_by(CampsiteDB.id).all()

@app.get("/api/campsites/{campsite_id}", response_model=CampsiteDetail)
def get_campsite(campsite_id: PathId, db: Session = Depends(get_db)):
    campsite = db.query(CampsiteDB).options(
        joinedload(CampsiteDB.campsite_type)
    ).filter(CampsiteDB.id == campsite_id).first()

    if not campsite:
        raise HTTPException(status_code=404, detail="Campsite not found")

    return campsite

@app.post("/api/campsites", response_model=Campsite, status_code=status.HTTP_201_CREATED)
def create_campsite(payload: CampsiteIn, response: Response, db: Session = Depends(get_db)):
    if db.get(CampsiteTypeDB, payload.campsite_type_id) is None:
        logger.warning(f"Rejected campsite '{payload.nickname}': unknown campsite type {payload.campsite_type_id}")
        raise HTTPException(status_code=400, detail=INVALID_DATA_MESSAGE)

    campsite = CampsiteDB(
        nickname=payload.nickname,
        image_url=payload.image_url,
        campsite_type_id=payload.campsite_type_id
    )
    db.add(campsite)
    _commit(db, "create campsite")
    db.refresh(campsite)

    logger.info(f"Inserted: {campsite.nickname} (ID: {campsite.id})")
    response.headers["Location"] = f"/api/campsites/{campsite.id}"
    return campsite

@app.put("/api/campsites/{campsite_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_campsite(campsite_id: PathId, payload: CampsiteIn, db: Session = Depends(get_db)):
    campsite = db.get(CampsiteDB, campsite_id)
    if campsite is None:
        raise HTTPException(status_code=404, detail="Campsite not found")

    if db.get(CampsiteTypeDB, payload.campsite_type_id) is None:
        logger.warning(f"Rejected update of campsite {campsite_id}: unknown campsite type {payload.campsite_type_id}")
        raise HTTPException(status_code=400, detail=INVALID_DATA_MESSAGE)

    campsite.nickname = payload.nickname
    campsite.campsite_type_id = payload.campsite_type_id
    campsite.image_url = payload.image_url
    _commit(db, f"update campsite {campsite_id}")

    logger.info(f"Updated: {campsite.nickname} (ID: {campsite_id})")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@app.delete("/api/campsites/{campsite_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_campsite(campsite_id: PathId, db: Session = Depends(get_db)):
    campsite = db.get(CampsiteDB, campsite_id)
    if campsite is None:
        raise HTTPException(status_code=404, detail="Campsite not found")

    db.delete(campsite)
    _commit(db, f"delete campsite {campsite_id}")

    logger.info(f"Deleted campsite {campsite_id} and its reservations")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@app.get("/api/reservations", response_model=List[Reservation])
def get_reservations(db: Session = Depends(get_db)):
    return _reservation_query(db).order_by(ReservationDB.checkin_date, ReservationDB.id).all()

@app.get("/api/reservations/{reservation_id}", response_model=Reservation)
def get_reservation(reservation_id: PathId, db: Session = Depends(get_db)):
    reservation = _reservation_query(db).filter(ReservationDB.id == reservation_id).first()

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    return reservation

@app.post("/api/reservations", response_model=Reservation, status_code=status.HTTP_201_CREATED)
def create_reservation(payload: ReservationIn, response: Response, db: Session = Depends(get_db)):
    """
    Book a campsite for a user.

    Every check runs before the row is written, so a rejected booking
    never reaches the database.
    """
    if payload.checkout_date <= payload.checkin_date:
        raise HTTPException(status_code=400, detail=CHECKOUT_BEFORE_CHECKIN_MESSAGE)

    campsite = db.query(CampsiteDB).options(
        joinedload(CampsiteDB.campsite_type)
    ).filter(CampsiteDB.id == payload.campsite_id).first()
    user_profile = db.get(UserProfileDB, payload.user_profile_id)

    if campsite is None or user_profile is None:
        logger.warning(
            f"Rejected reservation: campsite {payload.campsite_id} or user {payload.user_profile_id} does not exist"
        )
        raise HTTPException(status_code=400, detail=INVALID_DATA_MESSAGE)

    if payload.total_nights > campsite.campsite_type.max_reservation_days:
        raise HTTPException(status_code=400, detail=TOO_LONG_MESSAGE)

    reservation = ReservationDB(
        campsite_id=payload.campsite_id,
        user_profile_id=payload.user_profile_id,
        checkin_date=payload.checkin_date,
        checkout_date=payload.checkout_date
    )
    db.add(reservation)
    _commit(db, "create reservation")

    created = _reservation_query(db).filter(ReservationDB.id == reservation.id).first()
    logger.info(
        f"Reserved campsite {created.campsite_id} for user {created.user_profile_id}: "
        f"{created.total_nights} nights, total {created.total_cost} (ID: {created.id})"
    )
    response.headers["Location"] = f"/api/reservations/{created.id}"
    return created

@app.delete("/api/reservations/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_reservation(reservation_id: PathId, db: Session = Depends(get_db)):
    reservation = db.get(ReservationDB, reservation_id)
    if reservation is None:
        raise HTTPException(status_code=404, detail="Reservation not found")

    db.delete(reservation)
    _commit(db, f"cancel reservation {reservation_id}")

    logger.info(f"Cancelled reservation {reservation_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
