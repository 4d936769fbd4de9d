from sqlalchemy import create_engine, event, Column, String, Integer, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool
import os
import logging

from src.models.reservation import calculate_total_nights, calculate_total_cost

# Get logger
logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DB_URL", "sqlite:///./creek_river.db")
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

Base = declarative_base()

class CampsiteTypeDB(Base):
    __tablename__ = "campsite_types"
    id = Column(Integer, primary_key=True, index=True)
    campsite_type_name = Column(String, nullable=False)
    max_reservation_days = Column(Integer, nullable=False)
    fee_per_night = Column(Numeric(10, 2), nullable=False)

    campsites = relationship("CampsiteDB", back_populates="campsite_type")

class CampsiteDB(Base):
    __tablename__ = "campsites"
    id = Column(Integer, primary_key=True, index=True)
    nickname = Column(String, nullable=False)
    image_url = Column(String, nullable=True)
    campsite_type_id = Column(Integer, ForeignKey("campsite_types.id"), nullable=False)

    campsite_type = relationship("CampsiteTypeDB", back_populates="campsites")
    reservations = relationship(
        "ReservationDB",
        back_populates="campsite",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

class UserProfileDB(Base):
    __tablename__ = "user_profiles"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)

    reservations = relationship("ReservationDB", back_populates="user_profile")

class ReservationDB(Base):
    __tablename__ = "reservations"
    id = Column(Integer, primary_key=True, index=True)
    campsite_id = Column(Integer, ForeignKey("campsites.id", ondelete="CASCADE"), nullable=False)
    user_profile_id = Column(Integer, ForeignKey("user_profiles.id"), nullable=False)
    checkin_date = Column(DateTime, nullable=False)
    checkout_date = Column(DateTime, nullable=False)

    campsite = relationship("CampsiteDB", back_populates="reservations")
    user_profile = relationship("UserProfileDB", back_populates="reservations")

    @property
    def total_nights(self):
        return calculate_total_nights(self.checkin_date, self.checkout_date)

    @property
    def total_cost(self):
        # Unknown until the campsite and its type are attached
        if self.campsite is None or self.campsite.campsite_type is None:
            return None
        return calculate_total_cost(self.campsite.campsite_type.fee_per_night, self.total_nights)

def _engine_options(url):
    if not url.startswith("sqlite"):
        return {}
    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # In-memory databases only live as long as their connection
        options["poolclass"] = StaticPool
    return options

engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if engine.dialect.name != "sqlite":
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def create_tables():
    """Create any missing tables; existing tables are left untouched."""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created (if they didn't exist previously).")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

def drop_tables():
    """Drop every table; used to reset the database between test runs."""
    Base.metadata.drop_all(bind=engine)
    logger.info("Database tables dropped.")

def get_db():
    """FastAPI dependency yielding a session that is closed after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
