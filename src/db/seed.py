from datetime import datetime
from decimal import Decimal
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from src.db.database import SessionLocal, CampsiteTypeDB, CampsiteDB, UserProfileDB, ReservationDB

logger = logging.getLogger(__name__)

CAMPSITE_IMAGE_URL = "https://tnstateparks.com/assets/images/content-images/campgrounds/249/colsp-area2-site73.jpg"

SEED_CAMPSITE_TYPES = [
    {"id": 1, "campsite_type_name": "Tent", "fee_per_night": Decimal("15.99"), "max_reservation_days": 7},
    {"id": 2, "campsite_type_name": "RV", "fee_per_night": Decimal("26.50"), "max_reservation_days": 14},
    {"id": 3, "campsite_type_name": "Primitive", "fee_per_night": Decimal("10.00"), "max_reservation_days": 3},
    {"id": 4, "campsite_type_name": "Hammock", "fee_per_night": Decimal("12.00"), "max_reservation_days": 7},
]

SEED_CAMPSITES = [
    {"id": 1, "campsite_type_id": 1, "nickname": "Barred Owl", "image_url": CAMPSITE_IMAGE_URL},
    {"id": 2, "campsite_type_id": 2, "nickname": "RV Land", "image_url": CAMPSITE_IMAGE_URL},
    {"id": 3, "campsite_type_id": 3, "nickname": "Bedrock", "image_url": CAMPSITE_IMAGE_URL},
    {"id": 4, "campsite_type_id": 4, "nickname": "Hammock Bay", "image_url": CAMPSITE_IMAGE_URL},
    {"id": 5, "campsite_type_id": 1, "nickname": "Pitched", "image_url": CAMPSITE_IMAGE_URL},
    {"id": 6, "campsite_type_id": 4, "nickname": "Hang 10", "image_url": CAMPSITE_IMAGE_URL},
]

SEED_USER_PROFILES = [
    {"id": 1, "first_name": "John", "last_name": "Doe", "email": "John.Doe@gmail.comx"},
]

SEED_RESERVATIONS = [
    {
        "id": 1,
        "campsite_id": 1,
        "user_profile_id": 1,
        "checkin_date": datetime(2023, 9, 1, 16, 0, 0),
        "checkout_date": datetime(2023, 9, 8, 11, 0, 0)
    },
]

# Parents before children so foreign keys resolve
SEED_TABLES = [
    (CampsiteTypeDB, SEED_CAMPSITE_TYPES),
    (CampsiteDB, SEED_CAMPSITES),
    (UserProfileDB, SEED_USER_PROFILES),
    (ReservationDB, SEED_RESERVATIONS),
]

def _sync_id_sequences(db):
    """Move PostgreSQL id sequences past the explicitly seeded ids."""
    if db.bind.dialect.name != "postgresql":
        return
    for model, _ in SEED_TABLES:
        table = model.__tablename__
        db.execute(
            text(f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), COALESCE(MAX(id), 1)) FROM {table}")
        )

def seed_database():
    """
    Insert the seed rows when the database holds no campsite types yet.

    A database that already has data is left alone, even when rows the seed
    would create were later deleted.

    Returns:
        Number of rows inserted
    """
    db = SessionLocal()
    inserted = 0
    try:
        if db.query(CampsiteTypeDB).first() is not None:
            logger.debug("Skipping seed: database already has data")
            return inserted

        for model, rows in SEED_TABLES:
            db.add_all([model(**row) for row in rows])
            # Flush per table so children see their parents
            db.flush()
            inserted += len(rows)
            logger.info(f"Seeded {len(rows)} rows into {model.__tablename__}")

        _sync_id_sequences(db)
        db.commit()
        return inserted
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error seeding database: {str(e)}")
        raise
    finally:
        db.close()
