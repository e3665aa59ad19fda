from sqlalchemy import Column, String, DateTime, Date, Text, JSON, Integer, Uuid
from sqlalchemy.sql import func
import uuid
from bistro.core.database import Base

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    time = Column(String, nullable=False) # "19:00" or "7 PM"
    guests = Column(Integer, nullable=False)
    seating = Column(String, default="Any", nullable=False) # Indoor, Outdoor, Any
    cuisine = Column(String, default="Any", nullable=False)
    special_requests = Column(Text, default="None", nullable=False)

    status = Column(String, default="Pending", nullable=False, index=True) # Pending, Confirmed, Cancelled
    
    # Forecast as fetched during the conversation { "condition": "...", "temp": 31.2 }
    weather_info = Column(JSON, default=dict, nullable=False)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
